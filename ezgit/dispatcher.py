"""Routes one abstract action at a time into state transitions and git calls."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from .git_data import GitError, GitRepository, extract_commit_id
from .keys import Action, AnyAction, TextInput
from .state import ApplicationState, InputMode, Panel, UIState

logger = logging.getLogger(__name__)

MAIN_BRANCHES = ("main", "master")

# States left with Deselect/Cancel.
_EXITABLE = frozenset(
    {
        UIState.COMMIT_MESSAGE_ENTRY,
        UIState.CONFIRM_COMMIT,
        UIState.CREATE_BRANCH_ENTRY,
        UIState.COMMIT_DETAILS,
        UIState.KEY_GUIDE,
        UIState.CONFIRM_MERGE,
        UIState.CONFIRM_QUIT,
        UIState.ERROR,
    }
)


class DispatchResult(Enum):
    CONTINUE = "continue"
    TERMINATE = "terminate"


def merge_target(branches: List[str]) -> str:
    return MAIN_BRANCHES[0] if MAIN_BRANCHES[0] in branches else MAIN_BRANCHES[1]


class Dispatcher:
    """Applies actions to an :class:`ApplicationState`.

    Every repository operation goes through ``repo``; a :class:`GitError`
    raised by it becomes either the Error state or a status message, never
    an exception escaping :meth:`dispatch`.
    """

    def __init__(self, repo: GitRepository, *, limit: int = 256) -> None:
        self.repo = repo
        self.limit = limit

    def dispatch(self, state: ApplicationState, action: AnyAction) -> DispatchResult:
        state.status_message = None
        if state.input_mode is InputMode.TEXT:
            self._dispatch_text(state, action)
            return DispatchResult.CONTINUE
        if isinstance(action, TextInput):
            return DispatchResult.CONTINUE
        return self._dispatch_command(state, action)

    # text mode

    def _dispatch_text(self, state: ApplicationState, action: AnyAction) -> None:
        if isinstance(action, TextInput):
            state.pending_text += action.character
        elif action is Action.BACKSPACE:
            state.pending_text = state.pending_text[:-1]
        elif action is Action.CONFIRM:
            if state.ui_state is UIState.COMMIT_MESSAGE_ENTRY:
                self._confirm_commit_message(state)
            else:
                self._confirm_branch_name(state)
        elif action is Action.CANCEL:
            self._leave(state)

    def _confirm_commit_message(self, state: ApplicationState) -> None:
        if not state.pending_text.strip():
            logger.debug("Cannot confirm: commit message is empty")
            return
        self._transition(state, UIState.CONFIRM_COMMIT)

    def _confirm_branch_name(self, state: ApplicationState) -> None:
        name = state.pending_text.strip()
        if not name:
            logger.debug("Cannot confirm: branch name is empty")
            return
        state.pending_text = ""
        try:
            self.repo.create_branch(name)
        except GitError as err:
            logger.warning("Error creating branch %r: %s", name, err)
            state.status_message = f"Could not create branch {name}: {err}"
            self._transition(state, UIState.NORMAL)
            return
        logger.info("Branch %r created and checked out", name)
        state.current_branch_name = name
        try:
            self._reload(state)
        except GitError as err:
            self._fail(state, f"Refresh failed: {err}")
            return
        state.status_message = f"Switched to new branch {name}"
        self._transition(state, UIState.NORMAL)

    # command mode

    def _dispatch_command(self, state: ApplicationState, action: Action) -> DispatchResult:
        ui_state = state.ui_state
        if action is Action.CONFIRM:
            action = Action.SELECT
        elif action is Action.CANCEL:
            action = Action.DESELECT

        if action is Action.SELECT:
            return self._select(state)
        if action is Action.DESELECT:
            if ui_state in _EXITABLE:
                self._leave(state)
        elif action is Action.SWITCH_PANEL:
            state.focused_panel = (
                Panel.BRANCHES if state.focused_panel is Panel.COMMIT_LOG else Panel.COMMIT_LOG
            )
        elif action is Action.REFRESH:
            self._refresh(state)
        elif action in (Action.NAVIGATE_UP, Action.NAVIGATE_DOWN):
            self._navigate(state, -1 if action is Action.NAVIGATE_UP else 1)
        elif action in (Action.PAGE_UP, Action.PAGE_DOWN):
            self._page(state, -1 if action is Action.PAGE_UP else 1)
        elif action in (Action.NAVIGATE_LEFT, Action.NAVIGATE_RIGHT):
            if ui_state is UIState.NORMAL and state.focused_panel is Panel.COMMIT_LOG:
                delta = -1 if action is Action.NAVIGATE_LEFT else 1
                state.horizontal_scroll_offset = max(0, state.horizontal_scroll_offset + delta)
        elif ui_state is not UIState.NORMAL:
            logger.debug("%s ignored in %s", action.name, ui_state.name)
        elif action is Action.QUIT:
            self._transition(state, UIState.CONFIRM_QUIT)
        elif action is Action.COMMIT_WORK:
            state.pending_text = ""
            self._transition(state, UIState.COMMIT_MESSAGE_ENTRY)
        elif action is Action.CREATE_BRANCH:
            state.pending_text = ""
            self._transition(state, UIState.CREATE_BRANCH_ENTRY)
        elif action is Action.SHOW_KEY_GUIDE:
            self._transition(state, UIState.KEY_GUIDE)
        elif action is Action.MERGE_BRANCH:
            self._transition(state, UIState.CONFIRM_MERGE)
        return DispatchResult.CONTINUE

    def _navigate(self, state: ApplicationState, direction: int) -> None:
        if state.ui_state is UIState.COMMIT_DETAILS:
            state.commit_detail_viewport.step(direction)
        elif state.ui_state is UIState.NORMAL:
            state.focused_viewport.move(direction)

    def _page(self, state: ApplicationState, direction: int) -> None:
        if state.ui_state is UIState.COMMIT_DETAILS:
            state.commit_detail_viewport.page(direction)
        elif state.ui_state is UIState.NORMAL:
            state.focused_viewport.page(direction)

    def _select(self, state: ApplicationState) -> DispatchResult:
        ui_state = state.ui_state
        if ui_state is UIState.CONFIRM_QUIT:
            logger.info("Quit confirmed")
            return DispatchResult.TERMINATE
        if ui_state is UIState.NORMAL:
            if state.focused_panel is Panel.COMMIT_LOG:
                self._show_commit_details(state)
            else:
                self._checkout_selected_branch(state)
        elif ui_state is UIState.CONFIRM_COMMIT:
            self._commit_and_push(state)
        elif ui_state is UIState.CONFIRM_MERGE:
            self._merge(state)
        else:
            logger.debug("Select ignored in %s", ui_state.name)
        return DispatchResult.CONTINUE

    def _show_commit_details(self, state: ApplicationState) -> None:
        entry = state.selected_commit()
        if entry is None:
            return
        commit_id = extract_commit_id(entry)
        if not commit_id:
            self._fail(state, f"No commit id found in {entry!r}")
            return
        try:
            details = self.repo.commit_details(commit_id)
        except GitError as err:
            self._fail(state, f"Could not load commit {commit_id}: {err}")
            return
        state.selected_commit_detail = details
        state.commit_detail_viewport.reset(len(state.detail_lines()))
        self._transition(state, UIState.COMMIT_DETAILS)

    def _checkout_selected_branch(self, state: ApplicationState) -> None:
        branch = state.selected_branch()
        if branch is None:
            return
        try:
            self.repo.checkout(branch)
        except GitError as err:
            self._fail(state, f"Could not check out {branch}: {err}")
            return
        state.current_branch_name = branch
        try:
            self._reload(state)
        except GitError as err:
            self._fail(state, f"Switched to {branch}, but refresh failed: {err}")
            return
        state.status_message = f"Switched to branch {branch}"
        logger.info("Switched to branch %r", branch)

    def _commit_and_push(self, state: ApplicationState) -> None:
        message = state.pending_text
        state.pending_text = ""
        self._transition(state, UIState.NORMAL)
        try:
            self.repo.commit_and_push(message)
        except GitError as err:
            logger.warning("Error during commit and push: %s", err)
            state.status_message = f"Commit failed: {err}"
            return
        logger.info("Changes committed and pushed")
        state.status_message = "Changes committed and pushed"
        try:
            state.replace_commit_log(self._fetch_commit_log())
        except GitError as err:
            logger.warning("Could not reload commit log: %s", err)
            state.status_message = f"Changes committed and pushed; refresh failed: {err}"

    def _merge(self, state: ApplicationState) -> None:
        target = merge_target(state.branch_list)
        try:
            self.repo.merge_into(target)
        except GitError as err:
            self._fail(state, f"Could not merge into {target}: {err}")
            return
        logger.info("Merged into %r", target)
        try:
            state.replace_commit_log(self._fetch_commit_log())
            state.current_branch_name = self.repo.current_branch()
        except GitError as err:
            self._fail(state, f"Merged into {target}, but refresh failed: {err}")
            return
        state.last_error = None
        state.status_message = f"Merged into {target}"
        self._transition(state, UIState.NORMAL)

    def _refresh(self, state: ApplicationState) -> None:
        try:
            self._reload(state)
        except GitError as err:
            self._fail(state, f"Refresh failed: {err}")
            return
        state.status_message = "Refreshed"

    def _reload(self, state: ApplicationState) -> None:
        commit_log, branch_list = self._fetch()
        state.replace_commit_log(commit_log)
        state.replace_branch_list(branch_list)

    def _fetch(self) -> tuple[List[str], List[str]]:
        return self._fetch_commit_log(), self.repo.list_branches()

    def _fetch_commit_log(self) -> List[str]:
        return [commit.log_line() for commit in self.repo.list_commits(limit=self.limit)]

    # transitions

    def _discard(self, state: ApplicationState) -> None:
        """Drop the data that only the current ui_state gives meaning to."""
        left = state.ui_state
        if left in (
            UIState.COMMIT_MESSAGE_ENTRY,
            UIState.CONFIRM_COMMIT,
            UIState.CREATE_BRANCH_ENTRY,
        ):
            state.pending_text = ""
        elif left is UIState.COMMIT_DETAILS:
            state.selected_commit_detail = None
            state.commit_detail_viewport.reset(0)
        elif left is UIState.ERROR:
            state.last_error = None

    def _leave(self, state: ApplicationState) -> None:
        self._discard(state)
        self._transition(state, UIState.NORMAL)

    def _fail(self, state: ApplicationState, message: str) -> None:
        logger.warning(message)
        self._discard(state)
        state.last_error = message
        self._transition(state, UIState.ERROR)

    def _transition(self, state: ApplicationState, ui_state: UIState) -> None:
        logger.debug("%s -> %s", state.ui_state.name, ui_state.name)
        state.ui_state = ui_state
