"""Tests for the Textual window, driven through the test pilot."""
import pytest

from gptdesk.ui import (
    AnswerView,
    ChatController,
    DealerApp,
    DebugPanel,
    LogLevel,
    QuestionInput,
    StatusLine,
)
from gptdesk.ui.config import DEFAULT_TITLE

SIZE = (100, 40)


def make_app(client, instructions: str = "Analyze the following data:", **kwargs) -> DealerApp:
    return DealerApp(ChatController(client, instructions), **kwargs)


class TestLogLevel:
    """Tests for LogLevel helpers."""

    def test_from_string(self):
        assert LogLevel.from_string("INFO") == LogLevel.INFO
        assert LogLevel.from_string("warning") == LogLevel.WARNING

    def test_invalid_string_defaults_to_debug(self):
        assert LogLevel.from_string("loud") == LogLevel.DEBUG

    def test_name(self):
        assert LogLevel.name(LogLevel.ERROR) == "ERROR"
        assert LogLevel.name(99) == "UNKNOWN"


class TestAnswerView:
    """Tests for AnswerView version tracking."""

    @pytest.mark.asyncio
    async def test_stale_versions_are_ignored(self, gated_client):
        app = make_app(gated_client)
        async with app.run_test(size=SIZE):
            view = app.query_one("#answer", AnswerView)

            assert view.show_response(2, "newer") is True
            assert view.show_response(1, "older") is False
            assert view.text == "newer"
            assert view.version == 2

    @pytest.mark.asyncio
    async def test_answer_is_read_only(self, gated_client):
        app = make_app(gated_client)
        async with app.run_test(size=SIZE):
            assert app.query_one("#answer", AnswerView).read_only


class TestDealerApp:
    """Tests for the Send and Quit flows."""

    @pytest.mark.asyncio
    async def test_layout(self, gated_client):
        app = make_app(gated_client)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            assert app.title == DEFAULT_TITLE
            assert app.sub_title == "gated-model"
            assert app.query_one("#send-btn")
            assert app.query_one("#quit-btn")
            assert app.query_one("#question", QuestionInput).has_focus
            panel = app.query_one("#debug-panel", DebugPanel)
            assert not panel.display
            assert panel.border_subtitle == "Hidden"

    @pytest.mark.asyncio
    async def test_send_button_shows_answer(self, answering_endpoint):
        """Typed JSON goes out with the instruction; the canned answer is displayed."""
        async with answering_endpoint.client() as client:
            app = make_app(client)
            async with app.run_test(size=SIZE) as pilot:
                app.query_one("#question", QuestionInput).text = '{"key":"value"}'

                await pilot.click("#send-btn")
                await pilot.pause()
                await app.workers.wait_for_complete()
                await pilot.pause()

                assert app.query_one("#answer", AnswerView).text == "This is a mock response from GPT-4."
                assert app.controller.user_input == '{"key":"value"}'

        assert answering_endpoint.last_json["messages"][1] == {
            "role": "user",
            "content": '{"key":"value"}',
        }

    @pytest.mark.asyncio
    async def test_ctrl_j_sends(self, gated_client):
        gated_client.expect("hello", "hi there")
        gated_client.release("hello")
        app = make_app(gated_client)
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#question", QuestionInput).text = "hello"

            await pilot.press("ctrl+j")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.query_one("#answer", AnswerView).text == "hi there"
            assert app.query_one("#question", QuestionInput).text == "hello"

    @pytest.mark.asyncio
    async def test_error_is_displayed(self, endpoint_factory):
        import httpx

        endpoint = endpoint_factory(lambda request: httpx.Response(200, json={"choices": []}))
        async with endpoint.client() as client:
            app = make_app(client)
            async with app.run_test(size=SIZE) as pilot:
                await pilot.click("#send-btn")
                await pilot.pause()
                await app.workers.wait_for_complete()
                await pilot.pause()

                assert app.query_one("#answer", AnswerView).text == "Error: response contained no choices"

    @pytest.mark.asyncio
    async def test_second_send_does_not_cancel_first(self, gated_client):
        gated_client.expect("slow", "slow answer")
        gated_client.expect("fast", "fast answer")
        app = make_app(gated_client)
        async with app.run_test(size=SIZE) as pilot:
            question = app.query_one("#question", QuestionInput)

            question.text = "slow"
            await pilot.click("#send-btn")
            # Button ignores clicks while it still shows the pressed state
            await pilot.pause(0.3)
            question.text = "fast"
            await pilot.click("#send-btn")
            await pilot.pause()
            assert app.controller.in_flight == 2

            gated_client.release("fast")
            for _ in range(50):
                if app.controller.in_flight == 1:
                    break
                await pilot.pause()
            assert app.controller.in_flight == 1
            app.refresh_answer()
            assert app.query_one("#answer", AnswerView).text == "fast answer"

            gated_client.release("slow")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.query_one("#answer", AnswerView).text == "slow answer"
            assert app.controller.in_flight == 0

    @pytest.mark.asyncio
    async def test_quit_button_exits(self, gated_client, monkeypatch):
        app = make_app(gated_client)
        exits = []
        async with app.run_test(size=SIZE) as pilot:
            monkeypatch.setattr(app, "exit", lambda *args, **kwargs: exits.append(args))
            await pilot.click("#quit-btn")
            await pilot.pause()
            monkeypatch.undo()

        assert exits == [()]

    @pytest.mark.asyncio
    async def test_log_panel_traces_send(self, gated_client):
        gated_client.expect("q", "a")
        gated_client.release("q")
        app = make_app(gated_client, log_level="info")
        async with app.run_test(size=SIZE) as pilot:
            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display
            assert panel.log_level == LogLevel.INFO
            assert panel.border_subtitle == "Level: INFO"

            app.query_one("#question", QuestionInput).text = "q"
            await pilot.click("#send-btn")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            entries = panel.entries
            assert any("[Controller] Sending 1 chars to gated-model" in e for e in entries)
            # DEBUG entries are filtered out at INFO level
            assert not any("Send pressed" in e for e in entries)

    @pytest.mark.asyncio
    async def test_toggle_log_panel(self, gated_client):
        app = make_app(gated_client)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.press("ctrl+l")
            assert app.query_one("#debug-panel", DebugPanel).display
            await pilot.press("ctrl+l")
            panel = app.query_one("#debug-panel", DebugPanel)
            assert not panel.display
            assert panel.border_subtitle == "Hidden"


class TestAnswerActions:
    """Tests for the status line and answer copy."""

    @pytest.mark.asyncio
    async def test_status_counts_waiting_requests(self, gated_client):
        gated_client.expect("first", "first answer")
        gated_client.expect("second", "second answer")
        app = make_app(gated_client)
        async with app.run_test(size=SIZE) as pilot:
            status = app.query_one("#status", StatusLine)
            question = app.query_one("#question", QuestionInput)
            assert status.status_text == ""

            question.text = "first"
            app.action_send()
            question.text = "second"
            app.action_send()
            await pilot.pause()
            app.refresh_answer()
            assert status.status_text == "Waiting for answer... (2 requests)"

            gated_client.release("first")
            for _ in range(50):
                if app.controller.in_flight == 1:
                    break
                await pilot.pause()
            app.refresh_answer()
            assert status.status_text == "Waiting for answer..."

            gated_client.release("second")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert status.status_text == ""

    @pytest.mark.asyncio
    async def test_copy_answer(self, gated_client, monkeypatch):
        gated_client.expect("hello", "hi there")
        gated_client.release("hello")
        app = make_app(gated_client)
        copied = []
        async with app.run_test(size=SIZE) as pilot:
            monkeypatch.setattr(app, "copy_to_clipboard", copied.append)

            await pilot.press("ctrl+r")
            await pilot.pause()
            assert copied == []

            app.query_one("#question", QuestionInput).text = "hello"
            await pilot.press("ctrl+j")
            await app.workers.wait_for_complete()
            await pilot.pause()

            await pilot.press("ctrl+r")
            await pilot.pause()
            monkeypatch.undo()

        assert copied == ["hi there"]
