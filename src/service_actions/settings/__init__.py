"""Settings module built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Command line flags (applied by the CLI on top of the settings)
    2. Environment Variables
    3. ``.env`` file in the working directory
    4. Default Values in code (lowest priority)

Environment Variable Naming:
    - Source settings: ``AZURE_`` prefix (e.g., AZURE_SUBSCRIPTION_ID)
    - Output settings: ``ACTIONS_`` prefix (e.g., ACTIONS_HISTORY_LOG_PATH)
    - Top level: no prefix (LOG_LEVEL, LOG_FORMAT, APP_ENV)

Quick Start:
    >>> from service_actions.settings import get_settings
    >>> settings = get_settings()
    >>> settings.output.history_log_path
    'AzureHistory.txt'
"""

from .main import _Settings, get_settings, _reload_settings
from .base import ActionsBaseSettings
from .output import OutputSettings
from .source import SourceSettings

__all__ = [
    "get_settings",
    "ActionsBaseSettings",
    "OutputSettings",
    "SourceSettings",
]
