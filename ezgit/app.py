from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from .dispatcher import Dispatcher
from .git_data import GitError, GitRepository
from .state import ApplicationState
from .ui import EzGitTUI

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ezgit",
        description="Browse and operate on a git repository from a terminal UI.",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        default=".",
        help="Path to the git repository root (must contain .git). Defaults to current directory.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=256,
        help="Number of commits to load (default: 256)",
    )
    parser.add_argument(
        "--log-file",
        help="Write diagnostic logs to this file (default: no logging)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="Minimum level written to --log-file (default: WARNING)",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: str | None, level: str) -> None:
    if not log_file:
        package_logger = logging.getLogger("ezgit")
        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_state(repo: GitRepository, limit: int) -> ApplicationState:
    commits = repo.list_commits(limit=limit)
    return ApplicationState(
        commit_log=[commit.log_line() for commit in commits],
        branch_list=repo.list_branches(),
        current_branch_name=repo.current_branch(),
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_file, args.log_level)
    path = os.path.abspath(args.repo)
    if os.path.basename(path) == ".git":
        path = os.path.dirname(path)
    git_dir = os.path.join(path, ".git")
    if not os.path.isdir(path):
        print(f"error: repository path does not exist: {path}", file=sys.stderr)
        return 1
    if not os.path.isdir(git_dir):
        print(f"error: expected '.git' directory inside {path}", file=sys.stderr)
        return 1
    limit = max(1, args.limit)
    try:
        repo = GitRepository(path)
        state = load_state(repo, limit)
    except GitError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    logger.info("Loaded %d commits and %d branches from %s",
                len(state.commit_log), len(state.branch_list), path)
    try:
        tui = EzGitTUI(state, Dispatcher(repo, limit=limit), repo_path=path)
        tui.run()
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
