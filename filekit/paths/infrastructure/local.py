"""Local filesystem directory creation."""

from __future__ import annotations

import errno
import logging
import os

from ..domain import DirectoryCreationError

__all__ = ["LocalDirectoryCreator"]

logger = logging.getLogger(__name__)


class LocalDirectoryCreator:
    """Create directories on the local filesystem with :mod:`os`."""

    def create(self, path: str, mode: int, recursive: bool) -> bool:
        try:
            if recursive:
                os.makedirs(path, mode)
            else:
                os.mkdir(path, mode)
        except FileExistsError as e:
            if os.path.isdir(path):
                logger.debug(f"Directory already exists: {path}")
                return False
            logger.error(f"Cannot create directory, a file is in the way: {path}")
            raise DirectoryCreationError(errno.EEXIST, "File exists", path) from e
        except OSError as e:
            logger.error(f"Failed to create directory {path}: {e}")
            raise DirectoryCreationError(e.errno, e.strerror or str(e), path) from e

        logger.info(f"Created directory {path} (mode={mode:o}, recursive={recursive})")
        return True
