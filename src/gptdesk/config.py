"""Startup configuration.

Hides where the API key and the instruction text come from. Everything here
is read once at startup; a missing piece is a ConfigError and the
application does not start.

Environment variables:
    OPENAI_API_KEY: OpenAI API key (required)
    OPENAI_CHAT_MODEL: Model to request (default: gpt-4)
    OPENAI_BASE_URL: API base URL (default: https://api.openai.com/v1)
    GPTDESK_TIMEOUT: Request timeout in seconds (default: 60)
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .llm.providers import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT

DEFAULT_INSTRUCTION_FILE = Path("instruction.md")


class ConfigError(Exception):
    """Startup configuration is missing or invalid."""


class AppConfig(BaseModel):
    """Process-wide settings, read-only after startup."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False, description="Bearer token for the endpoint")
    instruction_text: str = Field(description="System message sent with every request")
    model: str = Field(default=DEFAULT_MODEL)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float | None = Field(default=DEFAULT_TIMEOUT, gt=0)


def read_instruction_file(path: Path) -> str:
    """Read the instruction text verbatim.

    Raises:
        ConfigError: If the file is missing or unreadable
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Instruction file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Unable to read instruction file {path}: {e}") from e


def _parse_timeout(raw: str) -> float | None:
    if raw.strip().lower() in ("", "none", "0"):
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"GPTDESK_TIMEOUT must be a number of seconds, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"GPTDESK_TIMEOUT must not be negative, got {raw!r}")
    return value


def load_config(
    instruction_path: Path = DEFAULT_INSTRUCTION_FILE,
    *,
    env_file: Path | None = None,
    model: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> AppConfig:
    """Load configuration from the environment, a .env file and the instruction file.

    Explicit arguments win over environment variables.

    Args:
        instruction_path: File holding the system instruction
        env_file: .env file to load (None searches from the working directory)
        model: Model override
        base_url: Base URL override
        timeout: Timeout override in seconds, 0 for none (None reads GPTDESK_TIMEOUT)

    Returns:
        Validated AppConfig

    Raises:
        ConfigError: If the API key or instruction file is missing, or a value is invalid
    """
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))

    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("OPENAI_API_KEY not set in environment or .env file")

    instruction_text = read_instruction_file(instruction_path)

    if timeout is None:
        timeout = _parse_timeout(os.getenv("GPTDESK_TIMEOUT", str(DEFAULT_TIMEOUT)))
    elif timeout == 0:
        timeout = None

    try:
        return AppConfig(
            api_key=api_key,
            instruction_text=instruction_text,
            model=model or os.getenv("OPENAI_CHAT_MODEL", DEFAULT_MODEL),
            base_url=base_url or os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e.errors()[0]['msg']}") from e
