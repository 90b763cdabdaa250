"""Repository state reader for session dashboards."""

from repo_inspector.config import InspectorConfig
from repo_inspector.errors import CommandError, ErrorCode, GitError
from repo_inspector.git import (
    BranchRecord,
    CommandResult,
    DivergenceCount,
    RepositoryInfo,
    RepositoryInspector,
)

__all__ = [
    "BranchRecord",
    "CommandError",
    "CommandResult",
    "DivergenceCount",
    "ErrorCode",
    "GitError",
    "InspectorConfig",
    "RepositoryInfo",
    "RepositoryInspector",
]
