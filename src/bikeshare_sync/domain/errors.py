"""Domain error types."""


class StationRecordFormatError(ValueError):
    """A serialized station record is ill-formed or incomplete."""

    def __init__(
        self, message: str, field: str | None = None, line_number: int | None = None
    ) -> None:
        self.field = field
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class SnapshotNotFoundError(FileNotFoundError):
    """No previous snapshot exists in version-control history."""


class FeedFetchError(RuntimeError):
    """The live station feed could not be fetched or understood."""


class MapDataError(RuntimeError):
    """The map-data API request failed."""


class SystemConfigurationError(ValueError):
    """The bike-share systems configuration is missing or invalid."""


class SystemSetupError(RuntimeError):
    """A system's data directory lacks files required for a run."""


class ReviewTaskError(RuntimeError):
    """Creating or validating remote review tasks failed."""


class SnapshotHistoryError(RuntimeError):
    """Version-control history could not be read (git missing or failing)."""
