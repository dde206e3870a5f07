from __future__ import annotations

import logging

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Header, Static

from .dispatcher import Dispatcher, DispatchResult, merge_target
from .keys import KEY_GUIDE, decode_key
from .state import ApplicationState, Panel, UIState

logger = logging.getLogger(__name__)

DEFAULT_CSS = """
Screen {
    layout: vertical;
}
#lists {
    width: 1fr;
}
#commit-log {
    height: 2fr;
    border: solid $surface 30%;
    padding: 0 1;
}
#branches {
    height: 1fr;
    border: solid $surface 30%;
    padding: 0 1;
}
#detail-panel {
    width: 1fr;
    border: solid $surface 30%;
    padding: 0 1;
}
.focused {
    border: solid $accent;
}
#footer {
    height: 1;
    background: $boost;
}
"""

HINT = "Enter select  Tab switch panel  c commit  b branch  m merge  g help  q quit"


def _inner_height(widget: Static) -> int:
    return max(0, widget.size.height - 2)


def render_commit_log(state: ApplicationState) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    if not state.commit_log:
        text.append("No commits found", style="italic")
        return text
    offset = state.horizontal_scroll_offset
    focused = state.focused_panel is Panel.COMMIT_LOG
    for idx in state.commit_log_viewport.visible_range():
        style = ""
        if idx == state.selected_commit_index:
            style = "bold reverse" if focused else "reverse"
        text.append(state.commit_log[idx][offset:], style=style)
        text.append("\n")
    return text


def render_branches(state: ApplicationState) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    if not state.branch_list:
        text.append("No branches found", style="italic")
        return text
    focused = state.focused_panel is Panel.BRANCHES
    for idx in state.branch_viewport.visible_range():
        name = state.branch_list[idx]
        is_current = name == state.current_branch_name
        style = "green" if is_current else ""
        if idx == state.selected_branch_index:
            style = f"{style} {'bold reverse' if focused else 'reverse'}".strip()
        text.append(f"{'*' if is_current else ' '} {name}", style=style)
        text.append("\n")
    return text


def render_detail(state: ApplicationState) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    if state.ui_state is UIState.KEY_GUIDE:
        width = max(len(keys) for keys, _ in KEY_GUIDE)
        for keys, description in KEY_GUIDE:
            text.append(keys.ljust(width + 2), style="bold")
            text.append(f"{description}\n")
        return text
    if state.ui_state is not UIState.COMMIT_DETAILS:
        text.append("Enter on a commit shows its details.", style="dim")
        return text
    lines = state.detail_lines()
    for idx in state.commit_detail_viewport.visible_range():
        line = lines[idx]
        style = ""
        if line.startswith("diff --git") or line.startswith("@@"):
            style = "bold"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("-"):
            style = "red"
        text.append(line, style=style)
        text.append("\n")
    return text


def render_footer(state: ApplicationState) -> Text:
    ui_state = state.ui_state
    if ui_state is UIState.COMMIT_MESSAGE_ENTRY:
        return Text.assemble(("Commit message: ", "bold"), state.pending_text, ("█", "blink"))
    if ui_state is UIState.CREATE_BRANCH_ENTRY:
        return Text.assemble(("New branch: ", "bold"), state.pending_text, ("█", "blink"))
    if ui_state is UIState.CONFIRM_COMMIT:
        return Text(f"Commit and push {state.pending_text!r}? Enter confirm, Esc cancel")
    if ui_state is UIState.CONFIRM_MERGE:
        target = merge_target(state.branch_list)
        return Text(
            f"Merge {state.current_branch_name or 'HEAD'} into {target}? Enter confirm, Esc cancel"
        )
    if ui_state is UIState.CONFIRM_QUIT:
        return Text("Quit? Enter confirm, Esc cancel")
    if ui_state is UIState.ERROR:
        return Text.assemble(("Error: ", "bold red"), state.last_error or "", "  (Esc to dismiss)")
    if ui_state is UIState.COMMIT_DETAILS:
        return Text("↑/↓ scroll  PgUp/PgDn page  Esc back")
    if ui_state is UIState.KEY_GUIDE:
        return Text("Esc back")
    return Text(state.status_message or HINT)


class _EzGitApp(App):
    """Textual application driving the commit log and branch panels."""

    CSS = DEFAULT_CSS
    BINDINGS = [
        Binding("tab", "forward_key('tab')", "Switch panel", show=False, priority=True),
        Binding("escape", "forward_key('escape')", "Back", show=False, priority=True),
    ]

    def __init__(self, state: ApplicationState, dispatcher: Dispatcher, *, repo_path: str) -> None:
        super().__init__()
        self.state = state
        self.dispatcher = dispatcher
        self.title = "ezgit"
        self.sub_title = repo_path

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Horizontal():
            with Vertical(id="lists"):
                yield Static(id="commit-log")
                yield Static(id="branches")
            yield Static(id="detail-panel")
        yield Static(id="footer")

    def on_mount(self) -> None:
        self.query_one("#commit-log", Static).border_title = "Commit Log"
        self.query_one("#branches", Static).border_title = "Branches"
        self.call_after_refresh(self._refresh_view)

    def on_resize(self, event: events.Resize) -> None:
        self.call_after_refresh(self._refresh_view)

    def on_key(self, event: events.Key) -> None:
        if self._handle_key(event.key, event.character):
            event.stop()
            event.prevent_default()

    def action_forward_key(self, key: str) -> None:
        self._handle_key(key, None)

    def _handle_key(self, key: str, character: str | None) -> bool:
        action = decode_key(key, character, self.state.input_mode)
        if action is None:
            return False
        if self.dispatcher.dispatch(self.state, action) is DispatchResult.TERMINATE:
            self.exit()
            return True
        self._refresh_view()
        return True

    def _refresh_view(self) -> None:
        log_panel = self.query_one("#commit-log", Static)
        branch_panel = self.query_one("#branches", Static)
        detail_panel = self.query_one("#detail-panel", Static)
        state = self.state
        state.commit_log_viewport.resize(_inner_height(log_panel))
        state.branch_viewport.resize(_inner_height(branch_panel))
        state.commit_detail_viewport.resize(_inner_height(detail_panel))

        log_panel.set_class(state.focused_panel is Panel.COMMIT_LOG, "focused")
        branch_panel.set_class(state.focused_panel is Panel.BRANCHES, "focused")
        detail_panel.border_title = "Key Guide" if state.ui_state is UIState.KEY_GUIDE else "Details"
        log_panel.update(render_commit_log(state))
        branch_panel.update(render_branches(state))
        detail_panel.update(render_detail(state))
        self.query_one("#footer", Static).update(render_footer(state))


class EzGitTUI:
    """Public interface wrapping the textual application."""

    def __init__(self, state: ApplicationState, dispatcher: Dispatcher, *, repo_path: str) -> None:
        self._app = _EzGitApp(state, dispatcher, repo_path=repo_path)

    def run(self) -> None:
        logger.info("Starting UI")
        self._app.run()
