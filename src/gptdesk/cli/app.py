"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from rich.console import Console

from ..config import DEFAULT_INSTRUCTION_FILE, AppConfig, ConfigError, load_config
from ..llm import ChatError, create_chat_client
from ..ui.config import DEFAULT_TITLE

# Create Typer app
app = typer.Typer(
    name="gptdesk",
    help="Ask a chat-completion model questions under a fixed instruction",
    no_args_is_help=True,
    add_completion=False,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)

InstructionOption = typer.Option(
    DEFAULT_INSTRUCTION_FILE,
    "--instructions",
    "-i",
    help="File whose content is sent as the system message"
)
EnvFileOption = typer.Option(
    None,
    "--env-file",
    help=".env file to load (default: search from the working directory)"
)
ModelOption = typer.Option(
    None,
    "--model",
    "-m",
    help="Model to request (default: $OPENAI_CHAT_MODEL or gpt-4)"
)
TimeoutOption = typer.Option(
    None,
    "--timeout",
    "-t",
    min=0.0,
    help="Request timeout in seconds, 0 for none (default: $GPTDESK_TIMEOUT or 60)"
)


def _load_or_exit(
    instructions: Path,
    env_file: Path | None,
    model: str | None,
    timeout: float | None,
) -> AppConfig:
    """Load startup configuration, exiting with a message if it is incomplete."""
    try:
        return load_config(
            instructions,
            env_file=env_file,
            model=model,
            timeout=timeout,
        )
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def _client_for(config: AppConfig):
    return create_chat_client(
        "openai",
        api_key=config.api_key,
        model=config.model,
        base_url=config.base_url,
        timeout=config.timeout,
    )


@app.command()
def run(
    instructions: Path = InstructionOption,
    env_file: Path | None = EnvFileOption,
    model: str | None = ModelOption,
    timeout: float | None = TimeoutOption,
    title: str = typer.Option(
        DEFAULT_TITLE,
        "--title",
        help="Window title"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Open the question/answer window."""
    config = _load_or_exit(instructions, env_file, model, timeout)

    async def _run():
        from ..ui import run_app

        await run_app(
            _client_for(config),
            config.instruction_text,
            title=title,
            log_level=log_level,
        )

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question sent as the user message"),
    instructions: Path = InstructionOption,
    env_file: Path | None = EnvFileOption,
    model: str | None = ModelOption,
    timeout: float | None = TimeoutOption,
):
    """Send one question without opening the window and print the answer."""
    config = _load_or_exit(instructions, env_file, model, timeout)

    async def _ask() -> str:
        async with _client_for(config) as client:
            return await client.send_chat(config.instruction_text, question)

    try:
        answer = asyncio.run(_ask())
    except ChatError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(answer, markup=False, highlight=False)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
