"""Composition root for the bike-share sync tool."""

import logging
import os
import sys

import aiohttp

from bikeshare_sync.adapters.config import AppConfig, JsonSystemCatalog
from bikeshare_sync.adapters.console import AutoConfirmationPrompt, ConsoleConfirmationPrompt
from bikeshare_sync.adapters.files import DataPaths, FileSystemSetup, GeoJsonSnapshotStore
from bikeshare_sync.adapters.gbfs_api import GbfsStationRepository
from bikeshare_sync.adapters.git import GitSnapshotHistory
from bikeshare_sync.adapters.maproulette_api import MaprouletteTaskService
from bikeshare_sync.adapters.osm import OsmChangeWriter
from bikeshare_sync.adapters.overpass_api import OverpassStationRepository
from bikeshare_sync.application.services import BikeShareSyncService
from bikeshare_sync.domain.errors import (
    FeedFetchError,
    ReviewTaskError,
    SystemConfigurationError,
    SystemSetupError,
)
from bikeshare_sync.domain.ports import ConfirmationPrompt

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(config: AppConfig) -> None:
    """Configure root logging to stderr; stdout is reserved for command output."""
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    if config.log_requests:
        os.environ["BIKESHARE_LOG_REQUESTS"] = "true"


def create_sync_service(
    config: AppConfig,
    session: aiohttp.ClientSession,
    prompt: ConfirmationPrompt | None = None,
) -> BikeShareSyncService:
    """Wire adapters into the sync service."""
    paths = DataPaths(config.data_dir)
    return BikeShareSyncService(
        catalog=JsonSystemCatalog(config.systems_file),
        feed_repository=GbfsStationRepository(session, config.gbfs_timeout_seconds),
        map_repository=OverpassStationRepository(
            session,
            paths,
            url=config.overpass_url,
            timeout_seconds=config.overpass_timeout_seconds,
            min_delay_seconds=config.overpass_min_delay_seconds,
        ),
        history=GitSnapshotHistory(config.git_executable),
        store=GeoJsonSnapshotStore(paths),
        changeset_writer=OsmChangeWriter(paths),
        review_tasks=MaprouletteTaskService(
            session,
            paths,
            api_key=config.maproulette_api_key,
            base_url=config.maproulette_api_url,
            task_delay_seconds=config.maproulette_task_delay_seconds,
        ),
        setup=FileSystemSetup(paths),
        prompt=prompt or ConsoleConfirmationPrompt(),
    )


async def run_system(config: AppConfig, system_id: int, create_tasks: bool | None = None) -> int:
    """Sync one system and print its summary. Returns the process exit code."""
    prompt = AutoConfirmationPrompt(create_tasks) if create_tasks is not None else None
    async with aiohttp.ClientSession() as session:
        service = create_sync_service(config, session, prompt)
        try:
            summary = await service.run_system(system_id, create_tasks)
        except (FeedFetchError, ReviewTaskError, SystemSetupError) as e:
            logger.error(f"Run failed for system {system_id}: {e}")
            return 1

    if summary is None:
        return 1
    print("\n".join(summary.render()))
    return 0


async def validate_system(config: AppConfig, system_id: int) -> int:
    async with aiohttp.ClientSession() as session:
        service = create_sync_service(config, session)
        return 0 if await service.validate_system(system_id) else 1


async def test_project(config: AppConfig, project_id: int) -> int:
    async with aiohttp.ClientSession() as session:
        service = create_sync_service(config, session)
        return 0 if await service.test_project(project_id) else 1


def list_systems(config: AppConfig) -> int:
    """Print configured systems as a table."""
    try:
        systems = JsonSystemCatalog(config.systems_file).load_all()
    except SystemConfigurationError as e:
        logger.error(str(e))
        return 1

    print(f"{'ID':>4}  {'System Name':<30} {'City':<20} {'MapRoulette':>11}")
    for system in sorted(systems, key=lambda s: s.id):
        project = str(system.maproulette_project_id) if system.maproulette_project_id > 0 else "-"
        print(f"{system.id:>4}  {system.name:<30} {system.city:<20} {project:>11}")
    print(f"\nTotal systems: {len(systems)}")
    return 0
