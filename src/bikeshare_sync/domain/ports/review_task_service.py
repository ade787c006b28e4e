"""Review task service port."""

from datetime import datetime
from typing import Protocol


class ReviewTaskService(Protocol):
    """Port for creating remote review tasks from classified stations."""

    async def validate_project(self, project_id: int) -> bool:
        """Check that a project exists and is accessible."""
        ...

    async def create_tasks(
        self, project_id: int, last_sync: datetime, system_name: str, is_new_system: bool
    ) -> None:
        """Create review challenges for added and removed stations."""
        ...
