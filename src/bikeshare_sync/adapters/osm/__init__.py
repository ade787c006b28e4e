"""OpenStreetMap file adapters."""

from bikeshare_sync.adapters.osm.osmchange_writer import OsmChangeWriter

__all__ = ["OsmChangeWriter"]
