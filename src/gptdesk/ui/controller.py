"""Send/Quit mediation between the window and the chat client.

Hides how a background call result becomes visible to the render loop:
- Each Send captures its inputs by value and awaits the client
- The finished result is published into a lock-guarded ResponseSlot
- The render loop polls the slot and redraws only when its version moved

Overlapping Sends are allowed. Nothing is queued or cancelled; whichever
call finishes last owns the displayed text.
"""

import threading
from collections.abc import Callable

from ..llm import ChatClient, ChatError

DebugCallback = Callable[[str, str, str], None]

ERROR_PREFIX = "Error: "


class ResponseSlot:
    """Single shared string written by finished Sends and read by the renderer.

    The version increments on every publish so readers can skip redraws.
    """

    def __init__(self, initial: str = "") -> None:
        self._lock = threading.Lock()
        self._text = initial
        self._version = 0

    def publish(self, text: str) -> int:
        """Replace the text and return the new version."""
        with self._lock:
            self._text = text
            self._version += 1
            return self._version

    def read(self) -> tuple[int, str]:
        """Return (version, text) as one consistent pair."""
        with self._lock:
            return self._version, self._text


class ChatController:
    """Owns the application state and the Send action.

    The API key lives inside the client; the instruction text is fixed at
    construction. Only user_input and the slot change afterwards.
    """

    def __init__(self, client: ChatClient, instruction_text: str) -> None:
        self._client = client
        self._instruction_text = instruction_text
        self._slot = ResponseSlot()
        self._in_flight = 0
        self._in_flight_lock = threading.Lock()
        self._debug_callback: DebugCallback | None = None
        self.user_input = ""

    @property
    def client(self) -> ChatClient:
        return self._client

    @property
    def instruction_text(self) -> str:
        return self._instruction_text

    @property
    def slot(self) -> ResponseSlot:
        return self._slot

    @property
    def last_response(self) -> str:
        """Text currently shown in the answer field."""
        return self._slot.read()[1]

    @property
    def in_flight(self) -> int:
        """Number of Sends that have not finished yet."""
        with self._in_flight_lock:
            return self._in_flight

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for request tracing.

        Args:
            callback: Function(level, component, message) or None to disable
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Controller", message)

    def _track(self, delta: int) -> None:
        with self._in_flight_lock:
            self._in_flight += delta

    async def send(self, user_text: str | None = None) -> str:
        """Run one request and publish its outcome.

        Args:
            user_text: Text to send; defaults to the current user_input

        Returns:
            The text that was published (answer or "Error: ..." message)
        """
        question = self.user_input if user_text is None else user_text
        instructions = self._instruction_text
        client = self._client

        self._track(1)
        self._debug("info", f"Sending {len(question)} chars to {client.model}")
        try:
            answer = await client.send_chat(instructions, question)
        except ChatError as e:
            self._debug("warning", f"{type(e).__name__}: {e}")
            result = f"{ERROR_PREFIX}{e}"
        except Exception as e:
            self._debug("error", f"Unexpected {type(e).__name__}: {e}")
            result = f"{ERROR_PREFIX}{e}"
        else:
            self._debug("info", f"Received {len(answer)} chars")
            result = answer
        finally:
            self._track(-1)

        version = self._slot.publish(result)
        self._debug("debug", f"Published response version {version}")
        return result
