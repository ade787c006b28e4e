"""Layout of the per-system data directory."""

from pathlib import Path

DEFAULT_DATA_DIR = "data_results"
UNNAMED_SYSTEM = "unnamed_system"


def sanitize_system_name(system_name: str) -> str:
    """Turn a system name into a single safe directory name.

    Path separators and drive colons become underscores; dots are removed so
    the result can never traverse outside the data directory.
    """
    safe = system_name.replace("/", "_").replace("\\", "_").replace(":", "_")
    safe = safe.replace("..", "").replace(".", "").strip()
    return safe or UNNAMED_SYSTEM


class DataPaths:
    """Resolves <data_dir>/<system>/<file> paths."""

    def __init__(self, data_dir: str | Path = DEFAULT_DATA_DIR) -> None:
        self.data_dir = Path(data_dir)

    def system_dir(self, system_name: str) -> Path:
        return self.data_dir / sanitize_system_name(system_name)

    def file_path(self, system_name: str, file_name: str | Path) -> Path:
        return self.system_dir(system_name) / file_name

    def exists(self, system_name: str, file_name: str | Path) -> bool:
        return self.file_path(system_name, file_name).is_file()

    def read_text(self, system_name: str, file_name: str | Path) -> str:
        """Read a system file as UTF-8; raises FileNotFoundError if absent."""
        return self.file_path(system_name, file_name).read_text(encoding="utf-8")

    def write_text(self, system_name: str, file_name: str | Path, content: str) -> Path:
        """Write a system file as UTF-8, creating parent directories."""
        path = self.file_path(system_name, file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
