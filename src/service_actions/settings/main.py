import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from service_actions.constants import LogFormat
from .base import ActionsBaseSettings
from .output import OutputSettings
from .source import SourceSettings


class _Settings(ActionsBaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    source: SourceSettings = Field(
        default_factory=SourceSettings,
        description="Azure Resource Manager catalog source configuration"
    )
    output: OutputSettings = Field(
        default_factory=OutputSettings,
        description="Snapshot, export and history file configuration"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: LogFormat = Field(
        default=LogFormat.JSON,
        description="Console log format: json (structured) or text"
    )

    def model_post_init(self, __context) -> None:
        super().model_post_init(__context)
        logging.getLogger(__name__).debug(
            "Settings loaded",
            extra={"app_env": self.app_env, "log_level": self.log_level},
        )


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Return the process-wide settings, reading the environment on first use.

    Command line flags never modify this object; they are layered on top
    in ``RunOptions``.

    Args:
        force_reload: Read the environment and ``.env`` again
    """
    global _settings

    if force_reload or _settings is None:
        _settings = _Settings()
    return _settings


def _reload_settings() -> _Settings:
    """Drop the cached settings and read them again (used by tests)."""
    return get_settings(force_reload=True)
