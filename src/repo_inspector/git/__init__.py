"""Git repository inspection."""

from repo_inspector.git.branches import BranchRecord
from repo_inspector.git.divergence import DivergenceCount, parse_divergence
from repo_inspector.git.locator import RepositoryInfo
from repo_inspector.git.repo import RepositoryInspector
from repo_inspector.git.runner import CommandResult, CommandRunner

__all__ = [
    "BranchRecord",
    "CommandResult",
    "CommandRunner",
    "DivergenceCount",
    "RepositoryInfo",
    "RepositoryInspector",
    "parse_divergence",
]
