"""System setup port."""

from typing import Protocol

from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem
from bikeshare_sync.domain.models.setup_validation import SetupValidation


class SystemSetup(Protocol):
    """Port for preparing a system's data directory."""

    def ensure(self, system: BikeShareSystem) -> None:
        """Create missing directories and template files."""
        ...

    def validate(self, system_name: str) -> SetupValidation:
        """Report which required files are missing."""
        ...

    def validate_instruction_files(self, system_name: str) -> None:
        """Raise SystemSetupError when task instructions are missing or empty."""
        ...
