"""Bike-share system configuration model."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MOVE_THRESHOLD_METERS = 3.0
DEFAULT_OSM_COMPARISON_THRESHOLD_METERS = 30.0


class BikeShareSystem(BaseModel):
    """One configured bike-share system, as listed in bikeshare_systems.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    name: str = ""
    city: str = ""
    maproulette_project_id: int = 0
    gbfs_api: str = ""
    brand_wikidata: str | None = Field(default=None, alias="brand:wikidata")
    station_name_prefix: str | None = None
    move_threshold_meters: float | None = None
    osm_comparison_threshold_meters: float | None = None

    def get_move_threshold_meters(self) -> float:
        """Tolerance for comparing two consecutive feed snapshots."""
        if self.move_threshold_meters is None:
            return DEFAULT_MOVE_THRESHOLD_METERS
        return self.move_threshold_meters

    def get_osm_comparison_threshold_meters(self) -> float:
        """Tolerance for comparing the feed against OSM (manual mapping is less precise)."""
        if self.osm_comparison_threshold_meters is None:
            return DEFAULT_OSM_COMPARISON_THRESHOLD_METERS
        return self.osm_comparison_threshold_meters

    def get_station_information_url(self) -> str:
        return self.gbfs_api
