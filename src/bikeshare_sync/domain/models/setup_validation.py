"""System setup validation result model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SetupValidation:
    """Outcome of checking a system's data directory and instruction files."""

    is_valid: bool
    missing_files: list[str] = field(default_factory=list)
    error_message: str | None = None
