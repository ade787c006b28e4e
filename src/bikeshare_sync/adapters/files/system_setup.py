"""Creates and validates the per-system data directory."""

import logging
from pathlib import Path

from bikeshare_sync.adapters.files.data_paths import DataPaths
from bikeshare_sync.adapters.overpass_api.queries import build_default_query
from bikeshare_sync.domain.errors import SystemSetupError
from bikeshare_sync.domain.models.bike_share_system import BikeShareSystem
from bikeshare_sync.domain.models.setup_validation import SetupValidation
from bikeshare_sync.domain.ports.system_setup import SystemSetup

logger = logging.getLogger(__name__)

INSTRUCTIONS_DIR = "instructions"
OVERPASS_QUERY_FILE = "stations.overpass"
INSTRUCTION_KINDS = ("added", "removed", "moved", "renamed")
TASK_INSTRUCTION_KINDS = ("added", "removed", "moved")

REMOVED_INSTRUCTIONS = """\
This station has been removed from the official bike share API. Please verify if it still exists in reality and remove it from OpenStreetMap if confirmed.

Steps:
1. Check if the station still exists physically at the mapped location
2. If the station is indeed gone, delete the point from OpenStreetMap
3. If the station still exists but is temporarily unavailable, add a note about its status
4. If you're unsure, add a note requesting verification from local mappers
"""

MOVED_INSTRUCTIONS = """\
This station has moved to a new location according to the official bike share API. Please verify the new location and update the point accordingly.

Steps:
1. Verify the new coordinates are correct
2. Move the existing point to the new location
3. Update any other tags if necessary (name, capacity, etc.)
4. If you find the station at a different location than suggested, use the actual observed location
"""

RENAMED_INSTRUCTIONS = """\
This station has been renamed according to the official bike share API. Please verify the new name and update the point accordingly.

Steps:
1. Verify the new name is correct
2. Update the 'name' tag with the new official name
3. Keep other tags unchanged unless they also need updating
4. If you observe a different name on-site, prioritize the name actually displayed at the station
"""


def instruction_file(kind: str) -> Path:
    return Path(INSTRUCTIONS_DIR) / f"{kind}.md"


def build_added_instructions(
    operator: str,
    brand: str,
    brand_wikidata: str | None = None,
    operator_type: str = "public",
) -> str:
    """Tagging template shown to mappers for stations missing from OSM.

    {{address}}, {{name}} and {{capacity}} are MapRoulette mustache
    placeholders filled from the task's properties.
    """
    tags = [
        "ref={{address}}",
        "name={{name}}",
        "capacity={{capacity}}",
        "fixme=please set exact location",
        "amenity=bicycle_rental",
        "bicycle_rental=docking_station",
        f"brand={brand}",
    ]
    if brand_wikidata:
        tags.append(f"brand:wikidata={brand_wikidata}")
    if brand != operator:
        tags.append(f"network={brand}")
        if brand_wikidata:
            tags.append(f"network:wikidata={brand_wikidata}")
    tags.append(f"operator={operator}")
    tags.append(f"operator:type={operator_type}")

    body = "\n".join(tags)
    return f"Add a point with these tags, or update existing point with them:\n\n```\n{body}\n```\n"


class FileSystemSetup(SystemSetup):
    """Ensures instruction templates and the Overpass query exist for a system."""

    def __init__(self, paths: DataPaths) -> None:
        self._paths = paths

    def _templates(self, system: BikeShareSystem) -> dict[str, str]:
        return {
            "added": build_added_instructions(system.name, system.name, system.brand_wikidata),
            "removed": REMOVED_INSTRUCTIONS,
            "moved": MOVED_INSTRUCTIONS,
            "renamed": RENAMED_INSTRUCTIONS,
        }

    def ensure(self, system: BikeShareSystem) -> None:
        """Create missing directories, instruction files and stations.overpass.

        Existing files are never overwritten.
        """
        system_dir = self._paths.system_dir(system.name)
        if not system_dir.is_dir():
            logger.info(f"Setting up new system {system.name} in {system_dir}")

        for kind, content in self._templates(system).items():
            path = instruction_file(kind)
            if self._paths.exists(system.name, path):
                logger.debug(f"Instruction file already exists: {path}")
                continue
            self._paths.write_text(system.name, path, content)
            logger.info(f"Created instruction file {path} for {system.name}")

        if not self._paths.exists(system.name, OVERPASS_QUERY_FILE):
            city = system.city or system.name
            self._paths.write_text(system.name, OVERPASS_QUERY_FILE, build_default_query(city))
            logger.info(f"Created default {OVERPASS_QUERY_FILE} for {system.name}")
            logger.info(
                f"Edit {self._paths.file_path(system.name, OVERPASS_QUERY_FILE)} "
                "to customize the Overpass query"
            )

    def validate(self, system_name: str) -> SetupValidation:
        """Report missing instruction files and a missing system directory."""
        missing = [
            str(instruction_file(kind))
            for kind in INSTRUCTION_KINDS
            if not self._paths.exists(system_name, instruction_file(kind))
        ]
        system_dir = self._paths.system_dir(system_name)

        if not system_dir.is_dir():
            return SetupValidation(
                is_valid=False,
                missing_files=missing,
                error_message=f"System directory does not exist: {system_dir}",
            )
        if missing:
            return SetupValidation(
                is_valid=False,
                missing_files=missing,
                error_message=(
                    f"System '{system_name}' is missing required files: {', '.join(missing)}"
                ),
            )
        return SetupValidation(is_valid=True)

    def validate_instruction_files(self, system_name: str) -> None:
        """Raise SystemSetupError unless added/removed/moved instructions have content."""
        problems: list[str] = []
        for kind in TASK_INSTRUCTION_KINDS:
            path = instruction_file(kind)
            if not self._paths.exists(system_name, path):
                problems.append(str(path))
                continue
            try:
                content = self._paths.read_text(system_name, path)
            except (OSError, UnicodeDecodeError):
                problems.append(f"{path} (unreadable)")
                continue
            if not content.strip():
                problems.append(f"{path} (empty)")

        if problems:
            raise SystemSetupError(
                f"Cannot create MapRoulette tasks for system '{system_name}': "
                f"missing or invalid instruction files: {', '.join(problems)}. "
                "Run the tool to auto-generate them or create them manually."
            )
