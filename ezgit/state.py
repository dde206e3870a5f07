from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .viewport import Viewport, ViewportStyle


class Panel(Enum):
    COMMIT_LOG = "commit_log"
    BRANCHES = "branches"


class UIState(Enum):
    NORMAL = "normal"
    COMMIT_MESSAGE_ENTRY = "commit_message_entry"
    CONFIRM_COMMIT = "confirm_commit"
    CONFIRM_QUIT = "confirm_quit"
    COMMIT_DETAILS = "commit_details"
    CREATE_BRANCH_ENTRY = "create_branch_entry"
    KEY_GUIDE = "key_guide"
    CONFIRM_MERGE = "confirm_merge"
    ERROR = "error"


class InputMode(Enum):
    COMMAND = "command"
    TEXT = "text"


TEXT_STATES = frozenset({UIState.COMMIT_MESSAGE_ENTRY, UIState.CREATE_BRANCH_ENTRY})


@dataclass
class ApplicationState:
    """Everything the front-end renders; mutated only by the dispatcher."""

    commit_log: List[str]
    branch_list: List[str]
    current_branch_name: str = ""
    focused_panel: Panel = Panel.COMMIT_LOG
    ui_state: UIState = UIState.NORMAL
    horizontal_scroll_offset: int = 0
    pending_text: str = ""
    selected_commit_detail: Optional[str] = None
    last_error: Optional[str] = None
    status_message: Optional[str] = None
    commit_log_viewport: Viewport = field(init=False)
    branch_viewport: Viewport = field(init=False)
    commit_detail_viewport: Viewport = field(init=False)

    def __post_init__(self) -> None:
        self.commit_log = list(self.commit_log)
        self.branch_list = list(self.branch_list)
        self.commit_log_viewport = Viewport(ViewportStyle.PAGED, len(self.commit_log))
        self.branch_viewport = Viewport(ViewportStyle.CENTERED, len(self.branch_list))
        self.commit_detail_viewport = Viewport(ViewportStyle.FREE)

    @property
    def input_mode(self) -> InputMode:
        return InputMode.TEXT if self.ui_state in TEXT_STATES else InputMode.COMMAND

    @property
    def selected_commit_index(self) -> int:
        return self.commit_log_viewport.selected

    @property
    def selected_branch_index(self) -> int:
        return self.branch_viewport.selected

    @property
    def focused_viewport(self) -> Viewport:
        if self.focused_panel is Panel.BRANCHES:
            return self.branch_viewport
        return self.commit_log_viewport

    def selected_commit(self) -> Optional[str]:
        if not self.commit_log:
            return None
        return self.commit_log[self.selected_commit_index]

    def selected_branch(self) -> Optional[str]:
        if not self.branch_list:
            return None
        return self.branch_list[self.selected_branch_index]

    def detail_lines(self) -> List[str]:
        if self.selected_commit_detail is None:
            return []
        return self.selected_commit_detail.splitlines()

    def replace_commit_log(self, commit_log: List[str]) -> None:
        self.commit_log = list(commit_log)
        self.commit_log_viewport.reset(len(self.commit_log))

    def replace_branch_list(self, branch_list: List[str]) -> None:
        self.branch_list = list(branch_list)
        self.branch_viewport.reset(len(self.branch_list))
