"""Station comparison result domain model."""

from dataclasses import dataclass, field

from bikeshare_sync.domain.models.station import Station


@dataclass(frozen=True)
class RenamedStation:
    """A station whose name changed while staying within the move tolerance."""

    current: Station
    previous: Station

    @property
    def id(self) -> str:
        return self.current.id

    @property
    def previous_name(self) -> str:
        return self.previous.name


@dataclass(frozen=True)
class StationComparison:
    """Classification of stations between a current and a reference snapshot."""

    added: list[Station] = field(default_factory=list)
    removed: list[Station] = field(default_factory=list)
    moved: list[Station] = field(default_factory=list)
    renamed: list[RenamedStation] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.moved) + len(self.renamed)

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0

    def counts(self) -> dict[str, int]:
        """Return the size of each category, keyed by category name."""
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "moved": len(self.moved),
            "renamed": len(self.renamed),
        }
