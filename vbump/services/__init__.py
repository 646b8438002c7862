"""Application services for vbump.

Services coordinate the domain rules (semantic versions, line rewrites)
with the infrastructure layers (platform/, git/).
"""
