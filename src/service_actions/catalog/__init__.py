"""Catalog extractor: raw provider listings to Services, Operations and Features."""

from .extractor import extract_catalog, extract_features, extract_operations, extract_services
from .types import CatalogExtraction, FeatureExtraction, OperationExtraction, ServiceExtraction

__all__ = [
    "extract_catalog",
    "extract_features",
    "extract_operations",
    "extract_services",
    "CatalogExtraction",
    "FeatureExtraction",
    "OperationExtraction",
    "ServiceExtraction",
]
