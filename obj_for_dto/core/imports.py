"""
Import resolution for generated files.

Locates helper and sibling type files by walking up from the directory the
generated file will live in. Each visited directory is checked for the file
itself and for a sub-directory named after the file's stem, which is where
non-flat generation places every class. Failure is never fatal for
generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..logging_config import get_logger
from .errors import ImportNotFound

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedFile:
    """A located file and its distance from the start directory."""

    path: Path
    levels_up: int
    subdirectory: Optional[str] = None

    @property
    def stem(self) -> str:
        """File name without its last extension, e.g. ``has-value``."""
        return self.path.stem

    def module_parts(self, stem: Optional[str] = None) -> List[str]:
        """Path components below the matched ancestor, extension dropped."""
        parts = [self.subdirectory] if self.subdirectory else []
        parts.append(stem or self.stem)
        return parts


class ImportResolver:
    """Finds files by walking from a start directory toward the root."""

    def __init__(
        self,
        start_dir: Optional[Union[str, Path]] = None,
        max_depth: Optional[int] = None,
    ):
        """
        Args:
            start_dir: Directory of the generated file (defaults to cwd)
            max_depth: Maximum number of parent directories to visit
        """
        self.start_dir = Path(start_dir) if start_dir else Path.cwd()
        self.max_depth = max_depth

    def find(self, file_name: str, subdirectory: Optional[str] = None) -> ResolvedFile:
        """
        Find ``file_name`` in the start directory or one of its ancestors.

        Args:
            file_name: Name of the file to locate
            subdirectory: Class directory checked at every level, defaults
                to the file name up to its first dot

        Raises:
            ImportNotFound: file is not present anywhere on the way up
        """
        directory = self.start_dir.resolve()
        subdirectory = subdirectory or file_name.split(".")[0]
        levels = 0

        while True:
            candidate = directory / file_name
            if candidate.is_file():
                logger.debug("Found %s %d level(s) up", file_name, levels)
                return ResolvedFile(path=candidate, levels_up=levels)

            nested = directory / subdirectory / file_name
            if nested.is_file():
                logger.debug(
                    "Found %s in %s/ %d level(s) up", file_name, subdirectory, levels
                )
                return ResolvedFile(
                    path=nested, levels_up=levels, subdirectory=subdirectory
                )

            if self.max_depth is not None and levels >= self.max_depth:
                break
            if directory.parent == directory:
                break

            directory = directory.parent
            levels += 1

        raise ImportNotFound(file_name, self.start_dir)

    def try_find(
        self, file_name: str, subdirectory: Optional[str] = None
    ) -> Optional[ResolvedFile]:
        """Like ``find`` but returns None when the file is missing."""
        try:
            return self.find(file_name, subdirectory)
        except ImportNotFound as e:
            logger.warning("%s (searched upward from %s)", e, self.start_dir)
            return None
