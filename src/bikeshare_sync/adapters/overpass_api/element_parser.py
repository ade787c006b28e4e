"""Parse Overpass JSON elements into stations."""

import logging
from typing import Any

from bikeshare_sync.domain.models.station import SourceElement, Station

logger = logging.getLogger(__name__)

UNNAMED_STATION = "Unnamed Station"


def _is_docking_station(element: dict[str, Any]) -> bool:
    tags = element.get("tags")
    return isinstance(tags, dict) and tags.get("bicycle_rental") == "docking_station"


def _first_node_id(way: dict[str, Any]) -> int | None:
    nodes = way.get("nodes")
    if isinstance(nodes, list) and nodes and isinstance(nodes[0], int):
        return nodes[0]
    return None


def index_nodes(elements: list[Any]) -> dict[int, dict[str, Any]]:
    """Map node id to node element for every node in a response."""
    return {
        element["id"]: element
        for element in elements
        if isinstance(element, dict) and element.get("type") == "node" and "id" in element
    }


def missing_way_node_ids(elements: list[Any], nodes: dict[int, dict[str, Any]]) -> set[int]:
    """First-node ids of docking-station ways that the response does not include."""
    missing: set[int] = set()
    for element in elements:
        if not isinstance(element, dict) or element.get("type") != "way":
            continue
        if not _is_docking_station(element):
            continue
        node_id = _first_node_id(element)
        if node_id is not None and node_id not in nodes:
            missing.add(node_id)
    return missing


def _parse_capacity(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _build_station(
    element: dict[str, Any], latitude: Any, longitude: Any, fallback_prefix: str
) -> Station | None:
    tags = element["tags"]
    element_id = element.get("id")

    if "ref" in tags:
        station_id = str(tags["ref"] or "")
    elif element_id is not None:
        station_id = f"{fallback_prefix}{element_id}"
    else:
        station_id = ""

    if not station_id:
        return None
    if not isinstance(latitude, int | float) or not isinstance(longitude, int | float):
        return None
    if latitude == 0 and longitude == 0:
        return None

    return Station(
        id=station_id,
        name=tags.get("name") or UNNAMED_STATION,
        latitude=float(latitude),
        longitude=float(longitude),
        capacity=_parse_capacity(tags.get("capacity")),
        source=SourceElement(
            element_id=str(element_id),
            element_type=element.get("type", ""),
            version=int(element.get("version") or 0),
            payload=element,
        ),
    )


def parse_elements(elements: list[Any], nodes: dict[int, dict[str, Any]]) -> list[Station]:
    """Turn docking-station nodes and ways into stations.

    The station id is the `ref` tag, falling back to `osm_<id>` for nodes and
    `osm_way_<id>` for ways. A way is placed at its first node, looked up in
    `nodes`. Relations are not located and are ignored.
    """
    stations: list[Station] = []
    for element in elements:
        if not isinstance(element, dict) or not _is_docking_station(element):
            continue

        element_type = element.get("type")
        station: Station | None = None
        if element_type == "node":
            station = _build_station(element, element.get("lat"), element.get("lon"), "osm_")
        elif element_type == "way":
            node_id = _first_node_id(element)
            node = nodes.get(node_id) if node_id is not None else None
            if node is None:
                logger.warning(f"Could not fetch coordinates for node {node_id} of way {element.get('id')}")
                continue
            station = _build_station(element, node.get("lat"), node.get("lon"), "osm_way_")

        if station is not None:
            stations.append(station)
    return stations
