"""Tests for branch enumeration."""

from pathlib import Path

from repo_inspector.config import GitConfig, InspectorConfig
from repo_inspector.git.repo import RepositoryInspector
from tests.helpers import FakeExecutor, fail

LOCAL = "for-each-ref --format=%(refname:short)%09%(HEAD) refs/heads/"
REMOTE = "for-each-ref --format=%(refname:short) refs/remotes/origin/"
COUNT = "rev-list --left-right --count"
WORKTREES = "worktree list --porcelain"


def by_name(branches):
    return {branch.name: branch for branch in branches}


def test_local_branches_with_current_marker(make_inspector) -> None:
    """Test parsing local branches with the HEAD marker."""
    inspector, _ = make_inspector(
        {
            WORKTREES: "",
            LOCAL: "main\t*\nfeat/x\t ",
            REMOTE: "",
            COUNT: "0\t0",
        }
    )

    branches = inspector.list_branches("/repo")

    assert [branch.name for branch in branches] == ["main", "feat/x"]
    main, feat = branches
    assert main.is_current and not main.is_remote
    assert not feat.is_current and not feat.is_remote


def test_remote_only_branches_included(make_inspector) -> None:
    """Test that branches only on the remote are listed after locals."""
    inspector, _ = make_inspector(
        {
            WORKTREES: "",
            LOCAL: "main\t*",
            REMOTE: "origin/feat/y",
            COUNT: "0\t0",
        }
    )

    branches = inspector.list_branches("/repo")

    assert [branch.name for branch in branches] == ["main", "feat/y"]
    remote = branches[1]
    assert remote.is_remote
    assert not remote.is_current
    assert remote.ahead == 0
    assert remote.behind == 0


def test_origin_head_excluded(make_inspector) -> None:
    """Test that the remote HEAD pointer is not a branch."""
    inspector, _ = make_inspector(
        {
            WORKTREES: "",
            LOCAL: "",
            REMOTE: "origin/HEAD\norigin/main",
            COUNT: "0\t0",
        }
    )

    branches = by_name(inspector.list_branches("/repo"))

    assert "HEAD" not in branches
    assert branches["main"].is_remote


def test_shortened_origin_head_excluded(make_inspector) -> None:
    """Test that git's bare-remote shortening of origin/HEAD is skipped too."""
    inspector, _ = make_inspector({LOCAL: "main\t*", REMOTE: "origin\norigin/main\norigin/dev", COUNT: "0\t0"})

    names = [branch.name for branch in inspector.list_branches("/repo")]

    assert names == ["main", "dev"]


def test_local_branch_wins_over_remote(make_inspector) -> None:
    """Test that a tracked branch is reported once, as local."""
    inspector, _ = make_inspector(
        {
            LOCAL: "main\t*\nfeature\t ",
            REMOTE: "origin/HEAD\norigin/main\norigin/feature\norigin/other",
            COUNT: "1\t2",
        }
    )

    branches = inspector.list_branches("/repo")
    names = [branch.name for branch in branches]

    assert names == ["main", "feature", "other"]
    assert names.count("feature") == 1
    assert not by_name(branches)["feature"].is_remote


def test_ahead_behind_for_local_branches(make_inspector) -> None:
    """Test that divergence columns are not swapped."""
    inspector, executor = make_inspector({WORKTREES: "", LOCAL: "dev\t ", REMOTE: "", COUNT: "3\t5"})

    dev = by_name(inspector.list_branches("/repo"))["dev"]

    assert dev.ahead == 5
    assert dev.behind == 3
    assert f"{COUNT} origin/dev...dev" in executor.commands()


def test_failed_divergence_is_zero(make_inspector) -> None:
    """Test that a failing divergence query yields zero counts."""
    inspector, _ = make_inspector({LOCAL: "local-only\t*", REMOTE: "", COUNT: fail("unknown revision")})

    branch = inspector.list_branches("/repo")[0]

    assert branch.ahead == 0
    assert branch.behind == 0


def test_divergence_not_queried_for_remote_only(make_inspector) -> None:
    """Test that remote-only branches skip the divergence query."""
    inspector, executor = make_inspector({LOCAL: "", REMOTE: "origin/a\norigin/b", COUNT: "9\t9"})

    branches = inspector.list_branches("/repo")

    assert all(branch.ahead == 0 and branch.behind == 0 for branch in branches)
    assert not any(command.startswith(COUNT) for command in executor.commands())


def test_empty_on_git_failure(make_inspector) -> None:
    """Test that a failing local query returns an empty list."""
    inspector, executor = make_inspector({"": fail("git failed")})

    assert inspector.list_branches("/repo") == []
    assert not any(command.startswith(REMOTE) for command in executor.commands())


def test_blank_lines_skipped(make_inspector) -> None:
    """Test that blank lines in ref output are ignored."""
    inspector, _ = make_inspector({LOCAL: "main\t*\n\n  \nfix\t ", REMOTE: "\norigin/x\n", COUNT: "0\t0"})

    assert [branch.name for branch in inspector.list_branches("/repo")] == ["main", "fix", "x"]


def test_at_most_one_current(make_inspector) -> None:
    """Test that only the checked-out branch is current."""
    inspector, _ = make_inspector({LOCAL: "a\t \nb\t*\nc\t ", REMOTE: "origin/d", COUNT: "0\t0"})

    current = [branch.name for branch in inspector.list_branches("/repo") if branch.is_current]

    assert current == ["b"]


def test_remote_failure_keeps_locals(make_inspector) -> None:
    """Test that a failing remote query still returns local branches."""
    inspector, _ = make_inspector({LOCAL: "main\t*", REMOTE: fail(), COUNT: "0\t0"})

    assert [branch.name for branch in inspector.list_branches("/repo")] == ["main"]


def test_worktree_paths_annotated(make_inspector) -> None:
    """Test that branches checked out in linked worktrees carry the path."""
    porcelain = (
        "worktree /repo\nHEAD aaaa\nbranch refs/heads/main\n\n"
        "worktree /repo-feature\nHEAD bbbb\nbranch refs/heads/feature\n\n"
        "worktree /repo-detached\nHEAD cccc\ndetached\n"
    )
    inspector, _ = make_inspector({WORKTREES: porcelain, LOCAL: "main\t*\nfeature\t ", REMOTE: "", COUNT: "0\t0"})

    branches = by_name(inspector.list_branches("/repo"))

    assert branches["main"].worktree_path is None
    assert branches["feature"].worktree_path == Path("/repo-feature")


def test_custom_remote_namespace() -> None:
    """Test enumeration against a configured remote."""
    executor = FakeExecutor(
        {
            LOCAL: "main\t*",
            "for-each-ref --format=%(refname:short) refs/remotes/upstream/": "upstream/HEAD\nupstream/main\nupstream/next",
            "rev-list --left-right --count upstream/main...main": "0\t1",
        }
    )
    inspector = RepositoryInspector(InspectorConfig(git=GitConfig(remote="upstream")), executor=executor)

    branches = inspector.list_branches("/repo")

    assert [branch.name for branch in branches] == ["main", "next"]
    assert branches[0].ahead == 1
