"""Bike-share system catalog backed by bikeshare_systems.json."""

import json
import logging
from pathlib import Path
from urllib.parse import urlparse

from pydantic import TypeAdapter, ValidationError

from bikeshare_sync.domain.errors import SystemConfigurationError
from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem

logger = logging.getLogger(__name__)

_SYSTEMS_ADAPTER = TypeAdapter(list[BikeShareSystem])


class JsonSystemCatalog:
    """Loads and validates configured systems from a JSON file."""

    def __init__(self, path: str | Path) -> None:
        """Initialize with the path of bikeshare_systems.json."""
        self._path = Path(path)

    def load_all(self) -> list[BikeShareSystem]:
        """Load every system, raising SystemConfigurationError on any problem."""
        if not self._path.exists():
            raise SystemConfigurationError(
                f"Configuration file '{self._path.name}' not found at {self._path.resolve()}. "
                "Create it with at least one bike-share system entry."
            )

        content = self._path.read_text(encoding="utf-8")
        if not content.strip():
            raise SystemConfigurationError(
                f"Configuration file '{self._path.name}' is empty. "
                "Please add at least one bike-share system configuration."
            )

        try:
            raw = json.loads(content)
        except json.JSONDecodeError as e:
            raise SystemConfigurationError(
                f"JSON parsing error in '{self._path.name}': {e}"
            ) from e

        try:
            systems = _SYSTEMS_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise SystemConfigurationError(
                f"Invalid system configuration in '{self._path.name}': {e}"
            ) from e

        if not systems:
            raise SystemConfigurationError(
                f"Configuration file '{self._path.name}' contains no systems."
            )

        self._validate(systems)
        logger.debug(f"Loaded {len(systems)} systems from {self._path}")
        return systems

    @staticmethod
    def _validate(systems: list[BikeShareSystem]) -> None:
        errors: list[str] = []
        used_ids: set[int] = set()

        for system in systems:
            system_errors: list[str] = []
            if system.id in used_ids:
                system_errors.append(f"Duplicate ID {system.id}")
            used_ids.add(system.id)

            if not system.name.strip():
                system_errors.append("Name is required")
            if not system.city.strip():
                system_errors.append("City is required")
            if not system.gbfs_api.strip():
                system_errors.append("GBFS API URL is required")
            elif not _is_http_url(system.gbfs_api):
                system_errors.append("GBFS API must be a valid HTTP/HTTPS URL")

            if system_errors:
                errors.append(f"System ID {system.id} ('{system.name}'): {', '.join(system_errors)}")

        if errors:
            raise SystemConfigurationError(
                "Configuration validation errors:\n" + "\n".join(errors)
            )

    def load_by_id(self, system_id: int) -> BikeShareSystem:
        """Load one system by id."""
        systems = self.load_all()
        for system in systems:
            if system.id == system_id:
                return system

        available = "\n".join(f"  ID {s.id}: {s.name} ({s.city})" for s in systems)
        raise SystemConfigurationError(
            f"System with ID {system_id} not found.\n\nAvailable systems:\n{available}"
        )


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
