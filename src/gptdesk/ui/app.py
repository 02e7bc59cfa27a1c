"""Main Textual application.

Renders the controller state and turns button presses into Send and Quit.
"""

import threading

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Label, Static

from ..llm import ChatClient
from .config import (
    ANSWER_LABEL,
    DEFAULT_TITLE,
    HEADING,
    QUESTION_LABEL,
    REFRESH_INTERVAL,
    LogLevel,
)
from .controller import ChatController
from .styles import APP_CSS
from .themes import DEALER_DARK
from .widgets import AnswerView, DebugPanel, QuestionInput, StatusLine


class DealerApp(App):
    """Question/answer window backed by a ChatController."""

    CSS = APP_CSS

    BINDINGS = [
        # Priority: the focused TextArea has its own ctrl+key editing bindings
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+r", "copy_answer", "Copy Answer", priority=True),
        Binding("ctrl+l", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        controller: ChatController,
        title: str = DEFAULT_TITLE,
        log_level: str | None = None,
        refresh_interval: float = REFRESH_INTERVAL,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._window_title = title
        self._log_level = log_level
        self._refresh_interval = refresh_interval

    @property
    def controller(self) -> ChatController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static(HEADING, id="heading")
            yield Label(QUESTION_LABEL, classes="field-label")
            yield QuestionInput(id="question")
            with Horizontal(id="actions"):
                yield Button("Send question", id="send-btn", variant="success").with_tooltip(
                    "Send the question (Ctrl+J)"
                )
                yield Button("Quit", id="quit-btn", variant="error")
                yield StatusLine(id="status")
            yield Label(ANSWER_LABEL, classes="field-label")
            yield AnswerView(id="answer")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(DEALER_DARK)
        self.theme = "dealer-dark"
        self.title = self._window_title
        self.sub_title = self._controller.client.model

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._controller.set_debug_callback(self._route_debug)
        self.set_interval(self._refresh_interval, self.refresh_answer)
        self.query_one("#question", QuestionInput).focus()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route controller debug messages to the log panel, from any thread."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_func = {
            "debug": log_panel.debug,
            "info": log_panel.info,
            "warning": log_panel.warning,
            "error": log_panel.error,
        }.get(level, log_panel.debug)
        if self._thread_id != threading.get_ident():
            self.call_from_thread(log_func, component, message)
        else:
            log_func(component, message)

    def refresh_answer(self) -> None:
        """Render loop tick: copy the slot into the answer view if it changed."""
        version, text = self._controller.slot.read()
        self.query_one("#answer", AnswerView).show_response(version, text)
        self.query_one("#status", StatusLine).show_in_flight(self._controller.in_flight)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self.action_send()
        elif event.button.id == "quit-btn":
            self.exit()

    def on_question_input_submitted(self, event: QuestionInput.Submitted) -> None:
        self.action_send()

    def action_send(self) -> None:
        """Capture the question and start a background request."""
        question = self.query_one("#question", QuestionInput).text
        self._controller.user_input = question
        self.query_one("#debug-panel", DebugPanel).debug("TUI", "Send pressed")
        self._send(question)

    @work(group="send", exclusive=False)
    async def _send(self, question: str) -> None:
        """Run one Send as a background async worker.

        Not exclusive: a second Send does not cancel the first, the slot keeps
        whichever finishes last.
        """
        await self._controller.send(question)
        self.refresh_answer()

    def action_copy_answer(self) -> None:
        """Copy the displayed answer to the clipboard."""
        answer = self._controller.last_response
        if answer:
            self.copy_to_clipboard(answer)
            self.notify("Answer copied")
        else:
            self.notify("No answer to copy", severity="warning")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_app(
    client: ChatClient,
    instruction_text: str,
    title: str = DEFAULT_TITLE,
    log_level: str | None = None,
) -> None:
    """Run the window until the user quits.

    Args:
        client: Chat client used for every Send
        instruction_text: System message sent with every request
        title: Window title
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    controller = ChatController(client, instruction_text)
    app = DealerApp(controller, title=title, log_level=log_level)
    try:
        await app.run_async()
    finally:
        await client.close()
