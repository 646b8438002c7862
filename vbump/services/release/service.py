"""Release orchestration: one version computation, one branch, two rewrites.

Order of operations:
1. read the manifest (authoritative current version) and compute the next
   version once;
2. read the descriptor's build counter;
3. create ``release/<next>`` from the base branch;
4. rewrite the descriptor, then the manifest.

The first failure stops the sequence. Nothing on disk changes if any of
steps 1-3 fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from vbump.core.config import Config
from vbump.core.result import Err, Ok, Result
from vbump.git.repository import GitError
from vbump.output.console import ConsoleProtocol, Style
from vbump.services.release.descriptor import BuildDescriptorUpgrader
from vbump.services.release.errors import BranchCreationError, BumpError
from vbump.services.release.manifest import ManifestUpgrader
from vbump.services.release.model import ReleaseClass, ReleaseOutcome, ReleasePlan


class BranchCreator(Protocol):
    def branch_exists(self, name: str) -> bool: ...

    def create_branch(self, name: str, *, start_point: str) -> Result[str, GitError]: ...


@dataclass(frozen=True, slots=True)
class _Prepared:
    plan: ReleasePlan
    manifest: ManifestUpgrader
    descriptor: BuildDescriptorUpgrader


class ReleaseService:
    """Bumps the manifest and descriptor versions and cuts the release branch."""

    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        repository: BranchCreator,
    ) -> None:
        self._config = config
        self._console = console
        self._repository = repository

    def plan(self, release_class: ReleaseClass) -> Result[ReleasePlan, BumpError]:
        """Compute the release without touching git or any file."""
        return self._prepare(release_class).map(lambda prepared: prepared.plan)

    def run(
        self,
        release_class: ReleaseClass,
        *,
        dry_run: bool = False,
        create_branch: bool = True,
    ) -> Result[ReleaseOutcome, BumpError]:
        prepared = self._prepare(release_class)
        if isinstance(prepared, Err):
            return prepared
        plan = prepared.value.plan

        self._print_plan(plan)
        if dry_run:
            self._console.print("dry run: no branch created, no file written", Style.DIM)
            return Ok(ReleaseOutcome(plan=plan, branch_created=False, written=(), dry_run=True))

        branch_created = False
        if create_branch:
            created = self._create_branch(plan)
            if isinstance(created, Err):
                return created
            branch_created = True

        self._console.info(f"updating {plan.descriptor_path.name}")
        descriptor = prepared.value.descriptor.upgrade(release_class)
        if isinstance(descriptor, Err):
            return descriptor
        if descriptor.value.version.lines_changed < 2:
            self._console.warning(
                f"{plan.descriptor_path.name}: expected 2 lines to change, "
                f"changed {descriptor.value.version.lines_changed}"
            )

        self._console.info(f"updating {plan.manifest_path.name}")
        manifest = prepared.value.manifest.upgrade(release_class)
        if isinstance(manifest, Err):
            return manifest

        self._console.success(
            f"released {plan.next_version} (versionCode {plan.next_build_counter})"
        )
        return Ok(
            ReleaseOutcome(
                plan=plan,
                branch_created=branch_created,
                written=(plan.descriptor_path, plan.manifest_path),
                dry_run=False,
            )
        )

    def _prepare(self, release_class: ReleaseClass) -> Result[_Prepared, BumpError]:
        manifest = ManifestUpgrader.load(self._config.package)
        if isinstance(manifest, Err):
            return manifest
        current = manifest.value.current_version

        next_version = manifest.value.next_version(release_class)
        if isinstance(next_version, Err):
            return next_version

        descriptor = BuildDescriptorUpgrader.load(self._config.android, current)
        if isinstance(descriptor, Err):
            return descriptor

        next_counter = descriptor.value.next_build_counter()
        if isinstance(next_counter, Err):
            return next_counter

        declared = descriptor.value.declared_version
        if declared is not None and declared != current.format():
            self._console.warning(
                f"{self._config.android.name} declares versionName {declared}, "
                f"{self._config.package.name} has {current}; "
                f"{self._config.package.name} wins and versionName will not be updated"
            )

        plan = ReleasePlan(
            release_class=release_class,
            current_version=current,
            next_version=next_version.value,
            current_build_counter=descriptor.value.current_build_counter,
            next_build_counter=next_counter.value,
            base_branch=self._config.develop_branch,
            manifest_path=self._config.package,
            descriptor_path=self._config.android,
        )
        return Ok(_Prepared(plan=plan, manifest=manifest.value, descriptor=descriptor.value))

    def _create_branch(self, plan: ReleasePlan) -> Result[None, BranchCreationError]:
        branch = plan.branch
        self._console.print(f"git checkout -b {branch} {plan.base_branch}", Style.DIM)

        if self._repository.branch_exists(branch):
            return Err(BranchCreationError(branch=branch, detail="branch already exists"))

        result = self._repository.create_branch(branch, start_point=plan.base_branch)
        if isinstance(result, Err):
            return Err(
                BranchCreationError(
                    branch=branch,
                    detail=result.error.message,
                    returncode=result.error.returncode,
                )
            )
        return Ok(None)

    def _print_plan(self, plan: ReleasePlan) -> None:
        console = self._console
        console.header(
            f"Release {plan.current_version} -> {plan.next_version} ({plan.release_class})"
        )
        console.print(f"manifest: {plan.manifest_path}", Style.DIM)
        console.print(f"descriptor: {plan.descriptor_path}", Style.DIM)
        console.print(
            f"versionCode: {plan.current_build_counter} -> {plan.next_build_counter}",
            Style.DIM,
        )
        console.print(f"branch: {plan.branch} (from {plan.base_branch})", Style.DIM)
