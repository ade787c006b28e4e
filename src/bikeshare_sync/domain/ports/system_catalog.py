"""System catalog port."""

from typing import Protocol

from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem


class SystemCatalog(Protocol):
    """Port for looking up configured bike-share systems."""

    def load_all(self) -> list[BikeShareSystem]:
        """Load every configured system."""
        ...

    def load_by_id(self, system_id: int) -> BikeShareSystem:
        """Load one system, raising SystemConfigurationError if unknown."""
        ...
