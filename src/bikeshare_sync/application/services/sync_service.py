"""Application service (use case) for syncing one bike-share system."""

import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING

from bikeshare_sync.application.services.station_comparison import (
    compare_stations,
    find_duplicate_ids,
)
from bikeshare_sync.application.services.station_name_prefixer import apply_station_name_prefix
from bikeshare_sync.domain.errors import (
    ReviewTaskError,
    SnapshotHistoryError,
    SnapshotNotFoundError,
    StationRecordFormatError,
    SystemConfigurationError,
)
from bikeshare_sync.domain.models import BikeShareSystem, RunSummary, Station, StationComparison
from bikeshare_sync.domain.station_records import decode_snapshot

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from bikeshare_sync.domain.ports import (
        ChangesetWriter,
        ConfirmationPrompt,
        MapStationRepository,
        ReviewTaskService,
        SnapshotHistory,
        SnapshotStore,
        StationFeedRepository,
        SystemCatalog,
        SystemSetup,
    )


class BikeShareSyncService:
    """Fetch, reconcile and publish the stations of a configured system."""

    def __init__(
        self,
        catalog: "SystemCatalog",
        feed_repository: "StationFeedRepository",
        map_repository: "MapStationRepository",
        history: "SnapshotHistory",
        store: "SnapshotStore",
        changeset_writer: "ChangesetWriter",
        review_tasks: "ReviewTaskService",
        setup: "SystemSetup",
        prompt: "ConfirmationPrompt",
    ) -> None:
        """Initialize with the collaborators for each external concern."""
        self._catalog = catalog
        self._feed_repository = feed_repository
        self._map_repository = map_repository
        self._history = history
        self._store = store
        self._changeset_writer = changeset_writer
        self._review_tasks = review_tasks
        self._setup = setup
        self._prompt = prompt

    def _load_system(self, system_id: int) -> BikeShareSystem | None:
        try:
            return self._catalog.load_by_id(system_id)
        except SystemConfigurationError as e:
            logger.error(f"Failed loading system configuration for {system_id}: {e}")
            return None

    async def _validate_project_or_raise(self, system: BikeShareSystem) -> None:
        project_id = system.maproulette_project_id
        logger.info(f"Validating MapRoulette project {project_id}")
        try:
            valid = await self._review_tasks.validate_project(project_id)
        except ReviewTaskError as e:
            logger.error(f"MapRoulette project validation failed for {project_id}: {e}")
            raise ReviewTaskError(
                f"Cannot proceed: MapRoulette project {project_id} validation failed. {e}"
            ) from e
        if not valid:
            raise ReviewTaskError(
                f"MapRoulette project {project_id} validation failed. "
                "Cannot proceed with task creation."
            )
        logger.info(f"MapRoulette project {project_id} validation successful")

    async def run_system(
        self, system_id: int, create_tasks: bool | None = None
    ) -> RunSummary | None:
        """Run a full sync for one system.

        Args:
            system_id: Id of the system in the catalog.
            create_tasks: True/False to answer the task-creation question
                up front; None asks the confirmation prompt.

        Returns:
            RunSummary of the run, or None when the system could not be loaded.
        """
        system = self._load_system(system_id)
        if system is None:
            return None

        logger.info(
            f"Starting comparison run for {system.name} ({system.city}) "
            f"id={system.id} project={system.maproulette_project_id}"
        )

        if system.maproulette_project_id > 0:
            await self._validate_project_or_raise(system)
        else:
            logger.warning(f"No MapRoulette project configured for {system.name}. Task creation skipped.")

        validation = self._setup.validate(system.name)
        if not validation.is_valid:
            logger.warning(
                f"System setup issue for {system.name}: {validation.error_message}. "
                "Attempting auto-create."
            )
        self._setup.ensure(system)

        started = time.monotonic()
        summary = RunSummary(system_name=system.name)

        snapshot_path = self._store.snapshot_path(system.name)
        last_sync = self._history.get_last_commit_date(snapshot_path)
        is_new_system = last_sync is None
        if is_new_system:
            logger.info(f"No previous snapshot found for {system.name}. Treating as new system.")
            last_sync = datetime.now()
        else:
            logger.info(f"Last sync date for {system.name}: {last_sync}")

        stations = await self._feed_repository.fetch_stations(system.get_station_information_url())
        stations, prefixed = apply_station_name_prefix(stations, system.station_name_prefix)
        if prefixed:
            logger.info(f"Applied prefix '{system.station_name_prefix}' to {prefixed} station name(s)")

        summary.generated_files.append(self._store.write_snapshot(system.name, stations))

        diff = self._compare_with_history(stations, system)
        summary.generated_files.extend(self._store.write_diff(system.name, diff))
        summary.stations_added = len(diff.added)
        summary.stations_removed = len(diff.removed)
        summary.stations_moved = len(diff.moved)
        summary.stations_renamed = len(diff.renamed)
        logger.info(f"Diff summary for {system.name}: {_format_counts(diff)}")

        await self._compare_with_map(stations, system, summary)

        summary.tasks_created = await self._maybe_create_tasks(
            system, last_sync, is_new_system, create_tasks
        )
        summary.duration_seconds = time.monotonic() - started
        return summary

    def _load_reference(self, system: BikeShareSystem) -> list[Station]:
        text = self._history.get_last_committed_version(self._store.snapshot_path(system.name))
        return decode_snapshot(text)

    def _compare_with_history(
        self, stations: list[Station], system: BikeShareSystem
    ) -> StationComparison:
        logger.info(f"Comparing current data with last committed version for {system.name}")
        try:
            reference = self._load_reference(system)
        except SnapshotNotFoundError:
            logger.warning(f"No previous version in git for {system.name}; treating all stations as added.")
            reference = []
        except StationRecordFormatError as e:
            logger.error(
                f"Previous snapshot for {system.name} is unreadable ({e}); "
                "treating all stations as added."
            )
            reference = []
        except SnapshotHistoryError as e:
            logger.error(
                f"Could not read snapshot history for {system.name} ({e}); "
                "treating all stations as added."
            )
            reference = []
        return compare_stations(stations, reference, system.get_move_threshold_meters())

    async def _compare_with_map(
        self, stations: list[Station], system: BikeShareSystem, summary: RunSummary
    ) -> None:
        try:
            logger.info(f"Fetching OSM stations for {system.name}")
            await self._map_repository.ensure_query(system)
            osm_stations = await self._map_repository.fetch_stations(system)
            logger.info(f"Fetched {len(osm_stations)} OSM stations for {system.name}")

            summary.generated_files.append(self._store.write_map_snapshot(system.name, osm_stations))
            duplicate_ids = [
                station_id
                for station_id in find_duplicate_ids(osm_stations)
                if not station_id.startswith("osm_")
            ]
            summary.osm_duplicates = len(duplicate_ids)
            if duplicate_ids:
                report = self._store.write_duplicate_report(system.name, osm_stations, duplicate_ids)
                if report is not None:
                    summary.generated_files.append(report)

            comparison = compare_stations(
                stations, osm_stations, system.get_osm_comparison_threshold_meters()
            )
            summary.generated_files.extend(self._store.write_map_comparison(system.name, comparison))
            changeset = self._changeset_writer.write_rename_changes(system.name, comparison.renamed)
            if changeset is not None:
                summary.generated_files.append(changeset)
            logger.info(f"OSM comparison for {system.name}: {_format_counts(comparison)}")
        except Exception as e:
            logger.error(f"OSM comparison failed for {system.name} - continuing: {e}")

    async def _maybe_create_tasks(
        self,
        system: BikeShareSystem,
        last_sync: datetime,
        is_new_system: bool,
        create_tasks: bool | None,
    ) -> bool:
        if create_tasks is None:
            create_tasks = self._prompt.confirm(
                "Create MapRoulette tasks for new locations?", default=False
            )
        if not create_tasks:
            logger.info("Task creation declined.")
            return False
        if system.maproulette_project_id <= 0:
            logger.warning(
                f"No valid MapRoulette project id configured for {system.name}; "
                "skipping task creation."
            )
            return False

        self._setup.validate_instruction_files(system.name)
        await self._review_tasks.create_tasks(
            system.maproulette_project_id, last_sync, system.name, is_new_system
        )
        return True

    async def validate_system(self, system_id: int) -> bool:
        """Check configuration, data directory and project access for a system."""
        logger.info(f"Validating system setup {system_id}")
        try:
            system = self._catalog.load_by_id(system_id)
            logger.info(f"System configuration loaded: {system.name} ({system.city})")

            validation = self._setup.validate(system.name)
            if not validation.is_valid:
                logger.error(validation.error_message)
                return False
            self._setup.validate_instruction_files(system.name)
            logger.info(f"Instruction files validated for {system.name}")

            if system.maproulette_project_id > 0:
                if not await self._review_tasks.validate_project(system.maproulette_project_id):
                    logger.error(
                        f"MapRoulette project {system.maproulette_project_id} is not usable "
                        f"for {system.name}"
                    )
                    return False
                logger.info(f"MapRoulette project {system.maproulette_project_id} validated")
            else:
                logger.warning(f"No MapRoulette project configured for {system.name} - task creation skipped")
        except Exception as e:
            logger.error(f"Validation failed for system {system_id}: {e}")
            return False

        logger.info(f"All validations passed for {system.name}. System ready.")
        return True

    async def test_project(self, project_id: int) -> bool:
        """Check that a MapRoulette project id can be used in configuration."""
        logger.info(f"Validating MapRoulette project {project_id}")
        try:
            valid = await self._review_tasks.validate_project(project_id)
        except ReviewTaskError as e:
            logger.error(f"Project validation failed for {project_id}: {e}")
            return False
        if valid:
            logger.info(f"Project {project_id} validation succeeded. Id can be used in configuration.")
        return valid


def _format_counts(comparison: StationComparison) -> str:
    return " ".join(f"{name}={count}" for name, count in comparison.counts().items())
