"""Catalog source and progress observer protocol definitions.

These protocols define the contracts between the extractor and its
external collaborators: the provider-listing source it pulls from and the
optional progress observer it reports through.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from service_actions.types import RawFeature, RawOperation


@runtime_checkable
class CatalogSource(Protocol):
    """Protocol for provider catalog sources.

    The source is a black box returning unordered collections. Any
    failure to reach it must surface as a fatal SOURCE_UNAVAILABLE
    ActionsError.
    """

    def list_provider_operations(self) -> Sequence[RawOperation]:
        """List every operation of every resource provider.

        Returns:
            Unordered raw operation entries
        """
        ...

    def list_provider_features(
        self, provider_namespace: Optional[str] = None
    ) -> Sequence[RawFeature]:
        """List feature registrations.

        Args:
            provider_namespace: Restrict the listing to one provider
                (e.g. ``Microsoft.Compute``); all providers when None

        Returns:
            Unordered raw feature entries
        """
        ...


@runtime_checkable
class ProgressObserver(Protocol):
    """Receives progress updates while records are extracted.

    Purely presentational; extraction results never depend on it.
    """

    def update(self, activity: str, completed: int, total: int) -> None:
        ...
