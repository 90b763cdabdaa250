"""Ahead/behind counts of a local branch against its remote counterpart."""

import logging
from dataclasses import dataclass

from repo_inspector.git.common import BranchName, PathLike, remote_prefix
from repo_inspector.git.runner import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DivergenceCount:
    """Commits a branch has that its upstream lacks (ahead) and vice versa (behind).

    ``available`` is False when no count could be obtained, in which case both
    counts are zero.
    """

    ahead: int = 0
    behind: int = 0
    available: bool = False


NO_DIVERGENCE = DivergenceCount()


def divergence_args(branch_name: BranchName, remote: str = "origin") -> list:
    """Build the rev-list query comparing ``<remote>/<branch>`` with ``<branch>``.

    The remote operand comes first, so git prints the remote-only count in
    the left column.
    """
    return [
        "rev-list",
        "--left-right",
        "--count",
        f"{remote_prefix(remote)}{branch_name}...{branch_name}",
    ]


def parse_divergence(raw: str) -> DivergenceCount:
    """Map ``rev-list --left-right --count <remote>...<local>`` output to counts.

    Column 0 counts commits only on the remote (behind), column 1 counts
    commits only on the local branch (ahead).

    Parameters
    ----------
    raw : str
        Tool output, e.g. ``"3\\t5"``

    Returns
    -------
    DivergenceCount
        Parsed counts, or NO_DIVERGENCE if the output is malformed
    """
    columns = raw.split()
    if len(columns) != 2:
        logger.debug("Unexpected divergence output: %r", raw)
        return NO_DIVERGENCE
    try:
        behind, ahead = (int(column) for column in columns)
    except ValueError:
        logger.debug("Non-numeric divergence output: %r", raw)
        return NO_DIVERGENCE
    if behind < 0 or ahead < 0:
        return NO_DIVERGENCE
    return DivergenceCount(ahead=ahead, behind=behind, available=True)


class DivergenceCalculator:
    """Compute divergence between local branches and the primary remote."""

    def __init__(self, runner: CommandRunner, remote: str = "origin") -> None:
        """Initialize divergence calculator.

        Parameters
        ----------
        runner : CommandRunner
            Runner used for the rev-list query
        remote : str
            Name of the primary remote
        """
        self.runner = runner
        self.remote = remote

    def status(self, repo_root: PathLike, branch_name: BranchName) -> DivergenceCount:
        """Return how far ``branch_name`` is ahead of and behind its remote copy.

        A missing upstream or any failing query yields NO_DIVERGENCE.
        """
        raw = self.runner.run_safe(divergence_args(branch_name, self.remote), repo_root)
        if raw is None:
            return NO_DIVERGENCE
        return parse_divergence(raw)
