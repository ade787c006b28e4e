"""MapRoulette review task adapter.

API Documentation: https://maproulette.org/docs/swagger-ui/index.html
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError

from bikeshare_sync.adapters.api_rate_limiter import ApiRateLimiter
from bikeshare_sync.adapters.api_request_logger import log_api_request
from bikeshare_sync.adapters.files.data_paths import DataPaths
from bikeshare_sync.adapters.files.geojson_snapshot_store import (
    EXTRA_IN_OSM_FILE,
    MISSING_IN_OSM_FILE,
)
from bikeshare_sync.domain.errors import ReviewTaskError, StationRecordFormatError
from bikeshare_sync.domain.ports.review_task_service import ReviewTaskService
from bikeshare_sync.domain.station_records import RECORD_SEPARATOR, decode_station

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

DEFAULT_API_URL = "https://maproulette.org/api/v2"
DEFAULT_TASK_DELAY_SECONDS = 0.1
CHALLENGE_DIFFICULTY = {"removed": 2, "added": 3}


class MaprouletteTaskService(ReviewTaskService):
    """Creates MapRoulette challenges from the feed-vs-OSM comparison files."""

    def __init__(
        self,
        session: "ClientSession",
        paths: DataPaths,
        api_key: str | None,
        base_url: str = DEFAULT_API_URL,
        task_delay_seconds: float = DEFAULT_TASK_DELAY_SECONDS,
    ) -> None:
        """Initialize the service.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            paths: Data directory layout with instructions and comparison files.
            api_key: MapRoulette API key sent in the apiKey header.
            base_url: MapRoulette API v2 base URL.
            task_delay_seconds: Delay between individual task uploads.
        """
        self._session = session
        self._paths = paths
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._rate_limiter = ApiRateLimiter.get_instance("maproulette_api", task_delay_seconds)

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise ReviewTaskError(
                "MAPROULETTE_API_KEY environment variable is required for project "
                "validation and task creation."
            )
        return {"apiKey": self._api_key}

    async def validate_project(self, project_id: int) -> bool:
        """Check that the project exists and the API key may access it.

        Raises:
            ReviewTaskError: If the key is missing, the project is not found,
                access is unauthorized, or the request fails.
        """
        headers = self._headers()
        url = f"{self._base_url}/project/{project_id}"
        log_api_request("GET", url, headers=headers)
        try:
            async with self._session.get(url, headers=headers) as response:
                return await self._handle_project_response(response, project_id)
        except (ClientError, asyncio.TimeoutError) as e:
            raise ReviewTaskError(
                f"Network error while validating MapRoulette project {project_id}: {e}"
            ) from e

    async def _handle_project_response(self, response: "ClientResponse", project_id: int) -> bool:
        if response.status == 404:
            raise ReviewTaskError(
                f"MapRoulette project {project_id} not found. "
                "Please verify the project ID and your access permissions."
            )
        if response.status == 401:
            raise ReviewTaskError(
                f"Unauthorized access to MapRoulette project {project_id}. "
                "Please check your API key and permissions."
            )
        if response.status != 200:
            body = await response.text()
            logger.debug(f"Validation response: {body[:500]}")
            raise ReviewTaskError(
                f"Failed to validate MapRoulette project {project_id}. HTTP Status: {response.status}"
            )

        project: Any = await response.json(content_type=None)
        if not isinstance(project, dict) or "name" not in project:
            return False

        logger.info(f"Found MapRoulette project {project['name']} (ID: {project_id})")
        if project.get("enabled") is False:
            logger.warning(
                f"Project {project['name']} (ID: {project_id}) is disabled; tasks may not be visible"
            )
        return True

    async def create_tasks(
        self, project_id: int, last_sync: datetime, system_name: str, is_new_system: bool
    ) -> None:
        """Create "removed" and "added" challenges for a system.

        The removed challenge is skipped for new systems so that existing OSM
        stations are not proposed for deletion.
        """
        logger.info("Creating MapRoulette tasks...")
        if not await self.validate_project(project_id):
            raise ReviewTaskError(
                f"MapRoulette project validation failed for project ID {project_id}. "
                "Cannot proceed with task creation."
            )

        period = f"at {datetime.now():%Y-%m-%d} since {last_sync:%Y-%m-%d}"
        if is_new_system:
            logger.info(
                "New system setup detected; skipping 'removed' challenge creation "
                "to preserve existing OSM data."
            )
        else:
            await self._create_challenge(
                project_id, "removed", f"{system_name} -- Removed stations {period}",
                system_name, EXTRA_IN_OSM_FILE,
            )

        await self._create_challenge(
            project_id, "added", f"{system_name} -- Added stations {period}",
            system_name, MISSING_IN_OSM_FILE,
        )
        logger.info("Skipping 'renamed' challenge creation (handled via osmChange file)")

    def _read_instruction(self, system_name: str, task_type: str) -> str:
        path = Path("instructions") / f"{task_type}.md"
        try:
            instruction = self._paths.read_text(system_name, path)
        except FileNotFoundError as e:
            raise ReviewTaskError(
                f"Critical instruction file not found: {self._paths.file_path(system_name, path)}. "
                f"Cannot create {task_type} challenge without instruction template."
            ) from e
        if not instruction.strip():
            raise ReviewTaskError(
                f"Instruction file is empty: {self._paths.file_path(system_name, path)}. "
                f"Cannot create {task_type} challenge without instruction content."
            )
        return instruction

    def _read_task_lines(self, system_name: str, task_type: str, file_name: str) -> list[str]:
        try:
            content = self._paths.read_text(system_name, file_name)
        except FileNotFoundError:
            logger.info(
                f"No {task_type} stations file {file_name} for system {system_name}; "
                "skipping challenge creation"
            )
            return []
        records: list[str] = []
        for line_number, line in enumerate(content.split("\n"), start=1):
            record = line.strip().lstrip(RECORD_SEPARATOR)
            if not record:
                continue
            try:
                decode_station(record)
            except StationRecordFormatError as e:
                logger.warning(
                    f"Skipping {task_type} record on line {line_number} of {file_name}: {e}"
                )
                continue
            records.append(record)
        return records

    async def _create_challenge(
        self,
        project_id: int,
        task_type: str,
        description: str,
        system_name: str,
        file_name: str,
    ) -> None:
        instruction = self._read_instruction(system_name, task_type)
        lines = self._read_task_lines(system_name, task_type, file_name)
        if not lines:
            logger.info(f"No valid {task_type} stations parsed; skipping challenge creation")
            return

        challenge = {
            "name": description,
            "description": description,
            "instruction": instruction,
            "checkinComment": f"{task_type} stations changeset for {description}",
            "blurb": instruction,
            "enabled": True,
            "difficulty": CHALLENGE_DIFFICULTY.get(task_type, 2),
            "requiresLocal": False,
            "parent": project_id,
        }
        challenge_id = await self._post_challenge(task_type, challenge)

        logger.info(f"Creating {len(lines)} {task_type} tasks")
        succeeded = 0
        for index, line in enumerate(lines, start=1):
            if await self._add_task(challenge_id, line):
                succeeded += 1
                logger.debug(f"Created {task_type} task {index}/{len(lines)}")
            else:
                logger.warning(f"Failed to create {task_type} task {index}/{len(lines)}")

        logger.info(
            f"{task_type.upper()} challenge creation completed: {description} (ID: {challenge_id})"
        )
        logger.info(
            f"Task results - Success: {succeeded} Failed: {len(lines) - succeeded} Total: {len(lines)}"
        )
        logger.info(
            f"View challenge: https://maproulette.org/admin/project/{project_id}/challenge/{challenge_id}"
        )

    async def _post_challenge(self, task_type: str, challenge: dict[str, Any]) -> int:
        headers = self._headers()
        url = f"{self._base_url}/challenge"
        log_api_request("POST", url, headers=headers, payload=challenge)
        try:
            async with self._session.post(url, json=challenge, headers=headers) as response:
                if response.status == 401:
                    raise ReviewTaskError(
                        f"Failed to create {task_type} challenge due to authorization issues. "
                        "Check your API key and project permissions."
                    )
                if response.status == 400:
                    raise ReviewTaskError(
                        f"Failed to create {task_type} challenge due to bad request. "
                        "Check challenge parameters and project configuration."
                    )
                if response.status not in (200, 201):
                    body = await response.text()
                    raise ReviewTaskError(
                        f"Failed to create {task_type} challenge. "
                        f"HTTP Status: {response.status}, Response: {body[:200]}"
                    )
                result = await response.json(content_type=None)
        except (ClientError, asyncio.TimeoutError) as e:
            raise ReviewTaskError(f"Network error while creating {task_type} challenge: {e}") from e

        try:
            return int(result["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ReviewTaskError(f"MapRoulette returned no id for the {task_type} challenge") from e

    async def _add_task(self, challenge_id: int, line: str) -> bool:
        await self._rate_limiter.acquire()
        headers = {**self._headers(), "Content-Type": "application/json"}
        url = f"{self._base_url}/challenge/{challenge_id}/addTasks"
        log_api_request("PUT", url, headers=headers, payload=line)
        try:
            async with self._session.put(url, data=line.encode("utf-8"), headers=headers) as response:
                if response.status in (200, 201, 204):
                    return True
                body = await response.text()
                logger.warning(f"addTasks returned status {response.status}: {body[:200]}")
                return False
        except (ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Network error adding task to challenge {challenge_id}: {e}")
            return False
