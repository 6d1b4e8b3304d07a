"""
Store hours loaded from local JSON files.

Useful for offline use and demos: the files hold exactly the arrays the REST
endpoints return.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from ..domain.exceptions import StoreAPIError
from ..domain.models import Override, WeeklyHours
from .schemas import parse_store_overrides, parse_store_times

logger = logging.getLogger(__name__)


class JsonStoreSource:
    """
    Data source reading weekly hours and overrides from JSON files.

    A missing overrides file simply means there are no overrides.
    """

    def __init__(self, store_times_file: Path, overrides_file: Optional[Path] = None):
        self.store_times_file = Path(store_times_file)
        self.overrides_file = Path(overrides_file) if overrides_file else None

    def get_store_times(self) -> List[WeeklyHours]:
        return parse_store_times(self._load(self.store_times_file))

    def get_store_overrides(self) -> List[Override]:
        if self.overrides_file is None or not self.overrides_file.exists():
            logger.info("No overrides file, continuing without overrides")
            return []
        return parse_store_overrides(self._load(self.overrides_file))

    @staticmethod
    def _load(path: Path) -> Any:
        if not path.exists():
            raise StoreAPIError(f"Store data file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as exc:
            raise StoreAPIError(f"Invalid JSON in {path}: {exc}") from exc
