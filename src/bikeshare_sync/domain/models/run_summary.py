"""Run summary domain model."""

from dataclasses import dataclass, field
from pathlib import Path

MAX_LISTED_FILES = 6


@dataclass
class RunSummary:
    """Counts and artifacts collected while syncing one system."""

    system_name: str
    stations_added: int = 0
    stations_removed: int = 0
    stations_moved: int = 0
    stations_renamed: int = 0
    osm_duplicates: int = 0
    generated_files: list[Path] = field(default_factory=list)
    tasks_created: bool = False
    duration_seconds: float = 0.0

    @property
    def total_changes(self) -> int:
        return (
            self.stations_added
            + self.stations_removed
            + self.stations_moved
            + self.stations_renamed
        )

    def _change_lines(self) -> list[str]:
        lines = ["Changes Detected:"]
        if self.total_changes == 0:
            lines.append("  No changes detected")
            return lines
        for count, symbol, label in (
            (self.stations_added, "+", "added"),
            (self.stations_removed, "-", "removed"),
            (self.stations_moved, "~", "moved"),
            (self.stations_renamed, "*", "renamed"),
        ):
            if count > 0:
                lines.append(f"  {symbol} {count} station(s) {label}")
        return lines

    def _file_lines(self) -> list[str]:
        if not self.generated_files:
            return []
        lines = ["Files Generated:"]
        for path in self.generated_files[:MAX_LISTED_FILES]:
            lines.append(f"  - {Path(path).name}")
        hidden = len(self.generated_files) - MAX_LISTED_FILES
        if hidden > 0:
            lines.append(f"  - ... and {hidden} more")
        return lines

    def _next_steps(self) -> list[str]:
        steps: list[str] = []
        if self.total_changes > 0:
            steps.append("Review changes in JOSM/QGIS")
        if self.osm_duplicates > 0:
            steps.append("Fix duplicate refs in OpenStreetMap")
        if self.total_changes > 0:
            steps.append("Update MapRoulette tasks if needed")
        if not steps:
            steps.append("No action required - data is in sync")
        return [f"  {index}. {step}" for index, step in enumerate(steps, start=1)]

    def render(self) -> list[str]:
        """Render the summary as plain text lines."""
        lines = [f"Summary: {self.system_name}", ""]
        lines.extend(self._change_lines())
        lines.append("")
        if self.osm_duplicates > 0:
            lines.append("OSM Data Quality:")
            lines.append(f"  ! {self.osm_duplicates} duplicate ref value(s) found")
            lines.append("")
        file_lines = self._file_lines()
        if file_lines:
            lines.extend(file_lines)
            lines.append("")
        lines.append("Next Steps:")
        lines.extend(self._next_steps())
        lines.append("")
        lines.append(f"Completed in {self.duration_seconds:.1f}s")
        return lines
