"""File selection for submissions."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..models import FileHandle, UploadConfig

logger = logging.getLogger(__name__)


class FileCollector:
    """
    Collects FileHandles from paths given by the user.

    Directories contribute only files with an accepted extension. Files
    named explicitly are always kept; an unaccepted extension is only
    logged, since the endpoint decides what it can process.
    """

    def __init__(self, config: Optional[UploadConfig] = None):
        self._config = config or UploadConfig()

    def collect_folder(self, folder: Path) -> List[Path]:
        """
        Collect accepted image files recursively.

        Args:
            folder: Root folder to scan

        Returns:
            Sorted list of file paths
        """
        files = []
        for item in folder.rglob("*"):
            if item.is_file() and self._config.is_accepted(item.name):
                files.append(item)
        return sorted(files)

    def collect(self, paths: Iterable[Path]) -> List[FileHandle]:
        """Expand paths into handles, keeping the order they were given in."""
        handles: List[FileHandle] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                found = self.collect_folder(path)
                logger.debug("Collected %d file(s) from %s", len(found), path)
                handles.extend(FileHandle.from_path(item) for item in found)
                continue
            if not self._config.is_accepted(path.name):
                logger.warning(
                    "%s is not one of %s; sending it anyway",
                    path.name,
                    ", ".join(self._config.accepted_extensions),
                )
            handles.append(FileHandle.from_path(path))
        return handles
