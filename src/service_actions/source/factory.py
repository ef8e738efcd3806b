"""Factory for creating catalog sources."""
from typing import Optional, TYPE_CHECKING

from service_actions.logging import get_logger
from .client import ArmCatalogSource

if TYPE_CHECKING:
    from service_actions.settings import SourceSettings

logger = get_logger(__name__)


def get_catalog_source(settings: Optional['SourceSettings'] = None) -> ArmCatalogSource:
    """Get an Azure Resource Manager catalog source.

    Args:
        settings: Source settings; taken from the settings singleton when omitted

    Returns:
        ArmCatalogSource instance
    """
    if settings is None:
        from service_actions.settings import get_settings
        settings = get_settings().source
    logger.debug(f"Creating catalog source for {settings.management_endpoint}")
    return ArmCatalogSource(settings)
