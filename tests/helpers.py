"""Fake executor and repository helpers for tests."""

from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from git.repo.base import Repo

from repo_inspector.errors import CommandError

Response = Union[str, Exception]


class FakeExecutor:
    """In-memory command executor.

    Responses are looked up by substring of the space-joined argument list,
    first match wins. Unmatched commands fail like git would.
    """

    def __init__(self, responses: Dict[str, Response]) -> None:
        self.responses = responses
        self.calls: List[Tuple[List[str], Path, float]] = []

    def __call__(self, args: Sequence[str], cwd: Path, timeout: float) -> str:
        self.calls.append((list(args), cwd, timeout))
        command = " ".join(args)
        for pattern, response in self.responses.items():
            if pattern in command:
                if isinstance(response, Exception):
                    raise response
                return response
        raise CommandError(f"Unmocked git command: {command}", command=["git", *args], status=128)

    def commands(self) -> List[str]:
        """Return every command issued, space-joined."""
        return [" ".join(args) for args, _, _ in self.calls]


def fail(message: str = "fatal: not a git repository") -> CommandError:
    """Build the error a failing git command raises."""
    return CommandError(message, status=128, stderr=message)


def commit_file(repo: Repo, filename: str, content: str = "content") -> None:
    """Write a file into the working tree and commit it."""
    path = Path(str(repo.working_tree_dir)) / filename
    path.write_text(content)
    repo.index.add([filename])
    repo.index.commit(f"Add {filename}")
