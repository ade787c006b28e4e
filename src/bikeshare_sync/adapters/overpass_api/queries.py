"""Overpass QL query templates."""

from collections.abc import Iterable

DOCKING_STATION_TAG = "bicycle_rental=docking_station"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_default_query(city: str) -> str:
    """Query all docking stations inside the area named after the city."""
    return (
        "[out:json];\n"
        "\n"
        f'area[name="{_quote(city)}"]->.city;\n'
        "(\n"
        f"    node(area.city)[{DOCKING_STATION_TAG}];\n"
        f"    way(area.city)[{DOCKING_STATION_TAG}];\n"
        f"    relation(area.city)[{DOCKING_STATION_TAG}];\n"
        ");\n"
        "\n"
        "out meta;\n"
    )


def build_nodes_query(node_ids: Iterable[int]) -> str:
    """Query a batch of nodes by id, used to locate ways by their first node."""
    ids = ",".join(str(node_id) for node_id in sorted(set(node_ids)))
    return f"[out:json];\n(\n  node(id:{ids});\n);\nout geom;\n"
