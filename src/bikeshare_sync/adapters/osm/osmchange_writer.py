"""osmChange writer for stations whose OSM name differs from the feed."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from bikeshare_sync.adapters.files.data_paths import DataPaths
from bikeshare_sync.domain.models.station_comparison import RenamedStation
from bikeshare_sync.domain.ports.changeset_writer import ChangesetWriter

logger = logging.getLogger(__name__)

OSMCHANGE_FILE = "bikeshare_renames.osc"
GENERATOR = "bikeshare-sync"


def _modify_block(parent: ET.Element, pair: RenamedStation) -> bool:
    source = pair.previous.source
    if source is None or not source.element_id or not source.element_type:
        logger.info(f"Skipping {pair.id} as it lacks OSM ID or type.")
        return False

    element_type = source.element_type.lower()
    payload: dict[str, Any] = source.payload
    attrib = {"id": source.element_id, "version": str(source.version)}
    if element_type == "node":
        for key in ("lat", "lon"):
            if key in payload:
                attrib[key] = str(payload[key])

    modify = ET.SubElement(parent, "modify")
    element = ET.SubElement(modify, element_type, attrib)

    if element_type == "way" and isinstance(payload.get("nodes"), list):
        for node_id in payload["nodes"]:
            ET.SubElement(element, "nd", {"ref": str(node_id)})

    tags = payload.get("tags")
    if not isinstance(tags, dict):
        tags = {}
    for key, value in tags.items():
        text = pair.current.name if key == "name" else str(value)
        ET.SubElement(element, "tag", {"k": str(key), "v": text})
    # unnamed OSM stations get the feed name added
    if "name" not in tags:
        ET.SubElement(element, "tag", {"k": "name", "v": pair.current.name})
    return True


def build_osmchange(renamed: list[RenamedStation]) -> tuple[ET.ElementTree, int]:
    """Build an osmChange document setting each OSM element's name to the feed name.

    Returns the document and the number of modify blocks in it.
    """
    root = ET.Element("osmChange", {"version": "0.6", "generator": GENERATOR})
    written = sum(
        1 for pair in sorted(renamed, key=lambda p: p.id) if _modify_block(root, pair)
    )
    tree = ET.ElementTree(root)
    ET.indent(tree)
    return tree, written


class OsmChangeWriter(ChangesetWriter):
    """Writes bikeshare_renames.osc into the system's data directory."""

    def __init__(self, paths: DataPaths) -> None:
        self._paths = paths

    def write_rename_changes(
        self, system_name: str, renamed: list[RenamedStation]
    ) -> Path | None:
        if not renamed:
            return None

        tree, written = build_osmchange(renamed)
        if written == 0:
            logger.info(f"No renamed OSM elements with source data for {system_name}")
            return None

        path = self._paths.file_path(system_name, OSMCHANGE_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(path, encoding="utf-8", xml_declaration=True)
        logger.info(f"Wrote {written} rename change(s) to {path}")
        return path
