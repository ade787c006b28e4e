"""MapRoulette API adapters."""

from bikeshare_sync.adapters.maproulette_api.maproulette_task_service import (
    MaprouletteTaskService,
)

__all__ = ["MaprouletteTaskService"]
