"""Custom Textual widgets for the window.

Hides widget implementation details:
- Question entry with a submit shortcut
- Read-only answer rendering
- Request status line
- Log rendering with level filtering
"""

from datetime import datetime

from textual.message import Message
from textual.widgets import RichLog, Static, TextArea

from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel


class QuestionInput(TextArea):
    """Multiline question field. Ctrl+J submits without inserting a newline.

    Note: ctrl+enter cannot work in terminals (terminal doesn't pass
    ctrl/shift modifiers with Enter), hence ctrl+j.
    """

    class Submitted(Message):
        """Posted when the user asks to send the current text."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("show_line_numbers", False)
        super().__init__(*args, **kwargs)

    def on_mount(self) -> None:
        self.cursor_blink = False
        self.highlight_cursor_line = False

    def on_key(self, event) -> None:
        if event.key == "ctrl+j":
            event.prevent_default()
            event.stop()
            self.post_message(self.Submitted(self.text))


class AnswerView(TextArea):
    """Read-only, monospace answer field that fills the available width."""

    BORDER_TITLE = "Answer"

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("read_only", True)
        kwargs.setdefault("soft_wrap", True)
        kwargs.setdefault("show_line_numbers", False)
        super().__init__(*args, **kwargs)
        self._version = 0

    @property
    def version(self) -> int:
        """Slot version currently on screen."""
        return self._version

    def show_response(self, version: int, text: str) -> bool:
        """Display text if version is newer than what is shown.

        Returns:
            True if the view was updated
        """
        if version <= self._version:
            return False
        self._version = version
        self.load_text(text)
        self.scroll_home(animate=False)
        return True


class DebugPanel(RichLog):
    """Log panel for request tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _level_colors = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _component_colors = {
        "TUI": "cyan",
        "Controller": "green",
        "LLM": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level
        self._entries: list[str] = []
        self.display = False
        self._update_subtitle()

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    @property
    def entries(self) -> list[str]:
        """Plain-text copies of the entries that passed the level filter."""
        return list(self._entries)

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def add_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Controller, LLM)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_name = LogLevel.name(level)
        level_color = self._level_colors.get(level, "white")
        comp_color = self._component_colors.get(component, "white")

        self._entries.append(f"{timestamp} {level_name:<5} [{component}] {message}")
        # Messages may contain brackets; escape them so they are not read as markup
        safe_message = message.replace("[", r"\[")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level_name:<5}[/] "
            f"[{comp_color}]\\[{component}][/] {safe_message}"
        )

    def debug(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns True if now visible."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display


class StatusLine(Static):
    """Request status shown next to the buttons."""

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._status_text = ""

    @property
    def status_text(self) -> str:
        """Text currently on the line."""
        return self._status_text

    def show_in_flight(self, in_flight: int) -> None:
        """Show how many Sends are still waiting for an answer."""
        if in_flight == 1:
            text = "Waiting for answer..."
        elif in_flight > 1:
            text = f"Waiting for answer... ({in_flight} requests)"
        else:
            text = ""
        if text != self._status_text:
            self._status_text = text
            self.update(text)
