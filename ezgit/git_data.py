from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import List

logger = logging.getLogger(__name__)

LOG_SEPARATOR = " | "


@dataclass
class GitCommit:
    """Container for the metadata shown in the commit log."""

    oid: str
    parent_oids: List[str]
    author_name: str
    author_email: str
    authored_at: datetime
    title: str
    body: str

    def log_line(self) -> str:
        authored_at = self.authored_at.strftime("%Y-%m-%d %H:%M")
        title = self.title or "No message"
        return f"{self.oid[:10]}{LOG_SEPARATOR}{title} ({self.author_name}, {authored_at})"


class GitRepository:
    """Thin wrapper on top of cli git interactions."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _run(self, *args: str, text: bool = True) -> subprocess.CompletedProcess:
        logger.debug("git %s", " ".join(args))
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self._path,
                text=text,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise GitError("git executable not found") from exc
        except subprocess.CalledProcessError as exc:
            raise GitError(exc.stderr.strip() or exc.stdout.strip()) from exc

    def list_commits(self, limit: int = 256) -> List[GitCommit]:
        """Return commits reachable from HEAD ordered by recency."""
        pretty = "%H%x1f%P%x1f%an%x1f%ae%x1f%ad%x1f%s%x1f%b%x1e"
        result = self._run(
            "log",
            f"-n{limit}",
            "--date=iso8601-strict",
            f"--pretty=format:{pretty}",
        )
        commits: List[GitCommit] = []
        for entry in filter(None, result.stdout.split("\x1e")):
            (
                oid,
                parents,
                author_name,
                author_email,
                authored_at,
                title,
                body,
            ) = entry.split("\x1f")
            commits.append(
                GitCommit(
                    oid=oid.strip(),
                    parent_oids=[p for p in parents.split(" ") if p],
                    author_name=author_name,
                    author_email=author_email,
                    authored_at=_parse_date(authored_at),
                    title=title,
                    body=body.rstrip(),
                )
            )
        return commits

    def list_branches(self) -> List[str]:
        result = self._run("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def current_branch(self) -> str:
        result = self._run("rev-parse", "--abbrev-ref", "HEAD")
        return result.stdout.strip()

    def checkout(self, branch: str) -> None:
        self._run("checkout", branch)

    @lru_cache(maxsize=128)
    def commit_details(self, oid: str) -> str:
        """Return the metadata, message and patch of a single commit."""
        result = self._run(
            "show",
            "--stat",
            "--patch",
            "--date=iso8601",
            "--format=commit %H%nAuthor: %an <%ae>%nDate:   %ad%n%n%B",
            oid,
        )
        return result.stdout

    def commit_and_push(self, message: str) -> None:
        """Stage everything, commit it and push the current branch."""
        self._run("add", "--all")
        self._run("commit", "-m", message)
        self._run("push")

    def create_branch(self, name: str) -> None:
        """Create a branch at HEAD and switch to it."""
        self._run("checkout", "-b", name)

    def merge_into(self, target: str) -> None:
        """Merge the checked-out branch into ``target``, leaving ``target`` checked out.

        A failed merge is aborted and the original branch is checked out
        again before the merge error propagates.
        """
        source = self.current_branch()
        if source == "HEAD":
            raise GitError("HEAD is detached; check out a branch to merge")
        if source == target:
            raise GitError(f"already on '{target}'; nothing to merge")
        self.checkout(target)
        try:
            self._run("merge", "--no-edit", source)
        except GitError:
            try:
                self._run("merge", "--abort")
            except GitError as abort_err:
                logger.warning("merge --abort failed: %s", abort_err)
            try:
                self.checkout(source)
            except GitError as checkout_err:
                logger.error("could not return to %r: %s", source, checkout_err)
            raise


def _parse_date(value: str) -> datetime:
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def extract_commit_id(log_line: str) -> str:
    """Return the commit id at the start of a commit-log display record.

    Malformed records yield an empty string.
    """
    head = log_line.split(LOG_SEPARATOR, 1)[0].strip()
    if not head or any(ch not in "0123456789abcdefABCDEF" for ch in head):
        return ""
    return head


class GitError(RuntimeError):
    """Raised when git commands fail."""
