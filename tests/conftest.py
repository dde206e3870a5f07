from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

import pytest

from ezgit.git_data import GitCommit, GitError
from ezgit.state import ApplicationState


def make_commit(oid: str, title: str) -> GitCommit:
    return GitCommit(
        oid=oid,
        parent_oids=[],
        author_name="Ada",
        author_email="ada@example.com",
        authored_at=datetime(2024, 5, 1, 12, 30),
        title=title,
        body="",
    )


class FakeRepository:
    """In-memory stand-in for GitRepository recording every call."""

    def __init__(
        self,
        commits: Optional[List[GitCommit]] = None,
        branches: Optional[List[str]] = None,
        current: str = "main",
    ) -> None:
        self.commits = commits if commits is not None else []
        self.branches = branches if branches is not None else ["main"]
        self.current = current
        self.details: Dict[str, str] = {}
        self.failures: Dict[str, str] = {}
        self.calls: List[tuple] = []

    def _call(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise GitError(self.failures[name])

    def list_commits(self, limit: int = 256) -> List[GitCommit]:
        self._call("list_commits", limit)
        return list(self.commits[:limit])

    def list_branches(self) -> List[str]:
        self._call("list_branches")
        return list(self.branches)

    def current_branch(self) -> str:
        self._call("current_branch")
        return self.current

    def checkout(self, branch: str) -> None:
        self._call("checkout", branch)
        self.current = branch

    def commit_details(self, oid: str) -> str:
        self._call("commit_details", oid)
        if oid not in self.details:
            raise GitError(f"bad object {oid}")
        return self.details[oid]

    def commit_and_push(self, message: str) -> None:
        self._call("commit_and_push", message)
        self.commits.insert(0, make_commit("f" * 40, message))

    def create_branch(self, name: str) -> None:
        self._call("create_branch", name)
        self.branches.append(name)
        self.current = name

    def merge_into(self, target: str) -> None:
        self._call("merge_into", target)
        self.current = target

    def mutating_calls(self) -> List[tuple]:
        readers = {"list_commits", "list_branches", "current_branch", "commit_details"}
        return [call for call in self.calls if call[0] not in readers]


@pytest.fixture
def repo() -> FakeRepository:
    commits = [
        make_commit("a1b2c3d4e5f60718293a", "Add parser"),
        make_commit("b2c3d4e5f60718293a4b", "Fix tests"),
        make_commit("c3d4e5f60718293a4b5c", "Initial commit"),
    ]
    return FakeRepository(commits=commits, branches=["feature", "main"], current="main")


@pytest.fixture
def state(repo: FakeRepository) -> ApplicationState:
    return ApplicationState(
        commit_log=[commit.log_line() for commit in repo.commits],
        branch_list=list(repo.branches),
        current_branch_name=repo.current,
    )
