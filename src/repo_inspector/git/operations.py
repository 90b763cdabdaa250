"""Fetch, pull and checkout."""

from repo_inspector.errors import CommandError, ErrorCode, GitError
from repo_inspector.git.common import BranchName, PathLike, log_git_error, validate_branch_name
from repo_inspector.git.runner import CommandResult, CommandRunner


class MutationOperations:
    """Pass-through operations that change the working tree or remote refs."""

    def __init__(self, runner: CommandRunner, fetch_prune: bool = True) -> None:
        """Initialize mutation operations.

        Parameters
        ----------
        runner : CommandRunner
            Runner used for every operation
        fetch_prune : bool
            Whether fetch removes stale remote-tracking refs
        """
        self.runner = runner
        self.fetch_prune = fetch_prune

    def fetch(self, path: PathLike) -> CommandResult:
        """Fetch from the remote.

        Parameters
        ----------
        path : str | Path
            Any path inside the working tree

        Returns
        -------
        CommandResult
            Tool output, or the failure message
        """
        args = ["fetch", "--prune"] if self.fetch_prune else ["fetch"]
        return self._run_reporting(args, path, ErrorCode.FETCH_ERROR, "Failed to fetch")

    def pull(self, path: PathLike) -> CommandResult:
        """Pull the current branch.

        Parameters
        ----------
        path : str | Path
            Any path inside the working tree

        Returns
        -------
        CommandResult
            Tool output, or the failure message
        """
        return self._run_reporting(["pull"], path, ErrorCode.PULL_ERROR, "Failed to pull")

    def checkout(self, path: PathLike, branch_name: BranchName) -> CommandResult:
        """Check out ``branch_name``.

        Parameters
        ----------
        path : str | Path
            Any path inside the working tree
        branch_name : str
            Branch to switch to

        Returns
        -------
        CommandResult
            Successful result carrying the tool output

        Raises
        ------
        CommandError
            If the branch name is invalid (code BRANCH_ERROR), the branch does
            not exist or local changes block the switch
        """
        try:
            validate_branch_name(branch_name)
        except GitError as err:
            raise CommandError(
                str(err),
                command=["checkout", branch_name],
                code=ErrorCode.BRANCH_ERROR,
                branch_name=branch_name,
                cause=err,
            ) from err
        try:
            return CommandResult.ok(self.runner.run(["checkout", branch_name], path))
        except CommandError as err:
            log_git_error(err, f"Failed to check out '{branch_name}' in {path}")
            err.code = ErrorCode.CHECKOUT_ERROR
            err.branch_name = branch_name
            raise

    def _run_reporting(self, args: list, path: PathLike, code: ErrorCode, context: str) -> CommandResult:
        try:
            return CommandResult.ok(self.runner.run(args, path))
        except CommandError as err:
            err.code = code
            log_git_error(err, f"{context} in {path}")
            return CommandResult.failure(str(err))
