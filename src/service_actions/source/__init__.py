"""Provider catalog sources."""
from .client import ArmCatalogSource
from .factory import get_catalog_source

__all__ = ['ArmCatalogSource', 'get_catalog_source']
