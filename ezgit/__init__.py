"""Terminal UI for browsing and operating on a git repository."""

from importlib import metadata

try:
    __version__ = metadata.version("ezgit")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"

from .dispatcher import Dispatcher, DispatchResult  # noqa: E402
from .git_data import GitCommit, GitRepository, GitError  # noqa: E402
from .keys import Action, TextInput, decode_key  # noqa: E402
from .state import ApplicationState, InputMode, Panel, UIState  # noqa: E402
from .ui import EzGitTUI  # noqa: E402
from .viewport import Viewport, ViewportStyle  # noqa: E402

__all__ = [
    "Action",
    "ApplicationState",
    "Dispatcher",
    "DispatchResult",
    "EzGitTUI",
    "GitCommit",
    "GitRepository",
    "GitError",
    "InputMode",
    "Panel",
    "TextInput",
    "UIState",
    "Viewport",
    "ViewportStyle",
    "decode_key",
    "__version__",
]
