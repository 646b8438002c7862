from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vbump.core.config import Config
from vbump.core.result import Err, Ok, Result
from vbump.git.repository import GitError
from vbump.output.console import MockConsole
from vbump.services.release.errors import (
    BranchCreationError,
    FieldNotFoundError,
    MalformedVersionError,
    MissingFileError,
)
from vbump.services.release.model import ReleaseClass
from vbump.services.release.semver import SemanticVersion
from vbump.services.release.service import ReleaseService

PACKAGE_JSON = '{\n  "name": "mobile-app",\n  "version": "1.2.3",\n  "private": true\n}\n'
GRADLE = (
    "android {\n"
    "    defaultConfig {\n"
    "        minSdkVersion 21\n"
    "        versionCode 7\n"
    '        versionName "1.2.3"\n'
    "    }\n"
    "}\n"
)


def _empty_calls() -> list[tuple[str, str]]:
    return []


@dataclass
class FakeRepository:
    existing: set[str] = field(default_factory=set)
    fail_with: str | None = None
    calls: list[tuple[str, str]] = field(default_factory=_empty_calls)

    def branch_exists(self, name: str) -> bool:
        return name in self.existing

    def create_branch(self, name: str, *, start_point: str) -> Result[str, GitError]:
        self.calls.append((name, start_point))
        if self.fail_with is not None:
            return Err(GitError(command="checkout", message=self.fail_with, returncode=128))
        return Ok("")


def _project(tmp_path: Path, *, package: str = PACKAGE_JSON, gradle: str = GRADLE) -> Config:
    (tmp_path / "package.json").write_text(package, encoding="utf-8")
    android = tmp_path / "android" / "app"
    android.mkdir(parents=True)
    (android / "build.gradle").write_text(gradle, encoding="utf-8")
    return Config(
        develop_branch="develop",
        android=android / "build.gradle",
        package=tmp_path / "package.json",
    )


def _service(
    config: Config, repo: FakeRepository | None = None
) -> tuple[ReleaseService, MockConsole, FakeRepository]:
    console = MockConsole()
    repository = repo or FakeRepository()
    return ReleaseService(config=config, console=console, repository=repository), console, repository


def test_patch_release_end_to_end(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, console, repo = _service(config)

    result = service.run(ReleaseClass.PATCH)

    assert isinstance(result, Ok)
    assert repo.calls == [("release/1.2.4", "develop")]
    assert '"version": "1.2.4"' in config.package.read_text(encoding="utf-8")
    gradle = config.android.read_text(encoding="utf-8")
    assert 'versionName "1.2.4"' in gradle
    assert "versionCode 8" in gradle
    assert result.value.branch_created is True
    assert result.value.written == (config.android, config.package)
    assert not console.has_error()


def test_minor_release_end_to_end(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, _, repo = _service(config)

    result = service.run(ReleaseClass.MINOR)

    assert isinstance(result, Ok)
    assert result.value.plan.next_version == SemanticVersion(1, 3, 0)
    assert repo.calls == [("release/1.3.0", "develop")]
    assert '"version": "1.3.0"' in config.package.read_text(encoding="utf-8")
    gradle = config.android.read_text(encoding="utf-8")
    assert 'versionName "1.3.0"' in gradle
    assert "versionCode 8" in gradle


def test_malformed_manifest_version_modifies_nothing(tmp_path: Path) -> None:
    config = _project(tmp_path, package=PACKAGE_JSON.replace('"1.2.3"', '"1.2"'))
    before_package = config.package.read_bytes()
    before_gradle = config.android.read_bytes()
    service, _, repo = _service(config)

    result = service.run(ReleaseClass.PATCH)

    assert isinstance(result, Err)
    assert isinstance(result.error, MalformedVersionError)
    assert repo.calls == []
    assert config.package.read_bytes() == before_package
    assert config.android.read_bytes() == before_gradle


def test_plan_touches_nothing(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, _, repo = _service(config)

    result = service.plan(ReleaseClass.MAJOR)

    assert isinstance(result, Ok)
    plan = result.value
    assert plan.current_version == SemanticVersion(1, 2, 3)
    assert plan.next_version == SemanticVersion(2, 0, 0)
    assert plan.current_build_counter == 7
    assert plan.next_build_counter == 8
    assert plan.branch == "release/2.0.0"
    assert repo.calls == []
    assert config.package.read_text(encoding="utf-8") == PACKAGE_JSON


def test_dry_run_touches_nothing(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, console, repo = _service(config)

    result = service.run(ReleaseClass.PATCH, dry_run=True)

    assert isinstance(result, Ok)
    assert result.value.dry_run is True
    assert result.value.written == ()
    assert repo.calls == []
    assert config.package.read_text(encoding="utf-8") == PACKAGE_JSON
    assert config.android.read_text(encoding="utf-8") == GRADLE
    assert console.find("release/1.2.4")


def test_branch_failure_stops_before_rewrites(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, _, _ = _service(config, FakeRepository(fail_with="fatal: invalid reference: develop"))

    result = service.run(ReleaseClass.PATCH)

    assert result == Err(
        BranchCreationError(
            branch="release/1.2.4",
            detail="fatal: invalid reference: develop",
            returncode=128,
        )
    )
    assert config.package.read_text(encoding="utf-8") == PACKAGE_JSON
    assert config.android.read_text(encoding="utf-8") == GRADLE


def test_existing_release_branch_is_refused(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, _, repo = _service(config, FakeRepository(existing={"release/1.2.4"}))

    result = service.run(ReleaseClass.PATCH)

    assert isinstance(result, Err)
    assert isinstance(result.error, BranchCreationError)
    assert result.error.returncode is None
    assert repo.calls == []
    assert config.package.read_text(encoding="utf-8") == PACKAGE_JSON


def test_no_branch_still_rewrites(tmp_path: Path) -> None:
    config = _project(tmp_path)
    service, _, repo = _service(config)

    result = service.run(ReleaseClass.PATCH, create_branch=False)

    assert isinstance(result, Ok)
    assert result.value.branch_created is False
    assert repo.calls == []
    assert '"version": "1.2.4"' in config.package.read_text(encoding="utf-8")


def test_missing_descriptor_fails_before_branch(tmp_path: Path) -> None:
    config = _project(tmp_path)
    config.android.unlink()
    service, _, repo = _service(config)

    result = service.run(ReleaseClass.PATCH)

    assert result == Err(MissingFileError(path=config.android))
    assert repo.calls == []
    assert config.package.read_text(encoding="utf-8") == PACKAGE_JSON


def test_descriptor_without_counter_fails(tmp_path: Path) -> None:
    config = _project(tmp_path, gradle='versionName "1.2.3"\n')
    service, _, _ = _service(config)

    result = service.run(ReleaseClass.PATCH)

    assert isinstance(result, Err)
    assert isinstance(result.error, FieldNotFoundError)


def test_drifted_descriptor_version_warns_and_manifest_wins(tmp_path: Path) -> None:
    config = _project(tmp_path, gradle=GRADLE.replace('"1.2.3"', '"1.2.0"'))
    service, console, _ = _service(config)

    result = service.run(ReleaseClass.PATCH)

    assert isinstance(result, Ok)
    assert console.has_warning()
    assert console.find("declares versionName 1.2.0")
    assert '"version": "1.2.4"' in config.package.read_text(encoding="utf-8")
    gradle = config.android.read_text(encoding="utf-8")
    assert 'versionName "1.2.0"' in gradle
    assert "versionCode 8" in gradle
