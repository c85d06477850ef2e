"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Builds the immutable `ToolConfig` once so adapters receive paths and
  command pieces explicitly instead of reading module globals.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "secure-props"
JAR_NAME = "secure-properties-tool.jar"
JAR_DOWNLOAD_URL = "https://docs.mulesoft.com/mule-runtime/latest/_attachments/secure-properties-tool-j17.jar"
MAIN_CLASS = "com.mulesoft.tools.SecurePropertiesTool"
CLASSPATH_FLAG = "-cp"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _quote_env_value(value: str) -> str:
    """Quote `value` so dotenv (and so pydantic-settings) reads it back unchanged.

    Single quotes keep ` #` and surrounding quotes literal. dotenv still
    expands `${...}` inside them, so each `$` is written as `${:-$}`: an
    unnamed variable that always falls back to a literal `$`.
    """

    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("$", "${:-$}")
    return f"'{escaped}'"


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env file.

    Existing entries are read back the way the settings loader sees them and
    rewritten quoted.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = {
            key: value
            for key, value in dotenv_values(env_path, encoding="utf-8").items()
            if value is not None
        }

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# secure-props user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={_quote_env_value(existing[key])}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if not sys.platform.startswith("win"):
        env_path.chmod(0o600)
    return env_path


class AppSettings(BaseSettings):
    """User preferences and runtime knobs.

    Only `default_password` is a real preference; the rest tune timeouts and
    the execution bridge.
    """

    model_config = SettingsConfigDict(
        env_prefix="SECURE_PROPS_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    default_password: str | None = Field(
        default=None,
        description="Password used when no per-call password is supplied.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for the artifact download (seconds).",
    )
    exec_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for one tool invocation (seconds).",
    )
    user_agent: str = Field(
        default="secure-props/0.1",
        min_length=1,
        description="User-Agent sent when downloading the tool.",
    )
    bridge: Literal["exec", "applescript"] = Field(
        default="exec",
        description="How the tool is launched: direct exec, or macOS `do shell script`.",
    )
    java_executable: str = Field(
        default="java",
        min_length=1,
        description="Java runtime used to launch the tool.",
    )


class ToolConfig(BaseModel):
    """Immutable description of the external tool and where it lives."""

    model_config = ConfigDict(frozen=True)

    home_dir: Path
    jar_name: str = JAR_NAME
    download_url: str = JAR_DOWNLOAD_URL
    java_executable: str = "java"
    classpath_flag: str = CLASSPATH_FLAG
    main_class: str = MAIN_CLASS
    download_timeout_seconds: float = Field(default=60.0, gt=0)
    exec_timeout_seconds: float = Field(default=60.0, gt=0)
    user_agent: str = "secure-props/0.1"
    bridge: Literal["exec", "applescript"] = "exec"

    @property
    def jar_path(self) -> Path:
        return self.home_dir / self.jar_name


def build_tool_config(settings: AppSettings | None = None, *, home_dir: Path | None = None) -> ToolConfig:
    """Create the `ToolConfig` for this process.

    `home_dir` exists for tests; the artifact location is otherwise fixed to
    the user's home directory.
    """

    settings = settings or AppSettings()
    return ToolConfig(
        home_dir=home_dir or Path.home(),
        java_executable=settings.java_executable,
        download_timeout_seconds=settings.http_timeout_seconds,
        exec_timeout_seconds=settings.exec_timeout_seconds,
        user_agent=settings.user_agent,
        bridge=settings.bridge,
    )
