"""JSON file persistence for tracker state."""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any
from balance_tracker.utils.errors import PersistenceError

logger = logging.getLogger(__name__)

_MISSING = object()


class JsonFile:
    """A single JSON document on disk, written atomically."""

    def __init__(self, path):
        self.path = Path(path)

    def read(self, default: Any = _MISSING) -> Any:
        """
        Load the document.

        Returns default when the file does not exist and a default was given.

        Raises:
            PersistenceError: If the file cannot be read or parsed
        """
        if not self.path.exists() and default is not _MISSING:
            return default
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Error reading {self.path.name}: {e}")

    def write(self, data: Any):
        """
        Replace the document with data.

        The content goes to a temporary file in the same directory first so
        a failed write never truncates the existing file.
        """
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Error saving {self.path.name}: {e}")
        logger.debug("Saved %s", self.path)
