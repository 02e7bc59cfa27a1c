"""Terminal window for gptdesk.

Provides a Textual-based window with a question field, Send and Quit
buttons, and a read-only answer field.

Module structure (each module hides a design decision):
- config.py: Log levels and window constants
- controller.py: Send mediation and the shared answer slot
- widgets.py: Question input, answer view, status line, log panel
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (user interaction flow)
"""

from .app import DealerApp, run_app
from .config import LogLevel
from .controller import ChatController, ResponseSlot
from .widgets import AnswerView, DebugPanel, QuestionInput, StatusLine

__all__ = [
    "AnswerView",
    "ChatController",
    "DealerApp",
    "DebugPanel",
    "LogLevel",
    "QuestionInput",
    "ResponseSlot",
    "StatusLine",
    "run_app",
]
