"""
Comparator Context
------------------
Read-only, lazily initialised view of the static Lama data. One instance is
created per process and passed into the dispatcher, so the resolved data
directory and parsed catalog are reused across warm invocations.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ComparatorConfig
from .data_dir import candidate_data_dirs, resolve_data_dir
from .store import find_product, load_catalog, read_review_text

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)


class ComparatorContext:
    """
    Memoised access to the data directory and the Lama catalog.

    Both values derive from files that are immutable within a deployment,
    so they are computed on first use and never invalidated.
    """

    def __init__(self, cfg: ComparatorConfig, cwd: Optional[Path] = None):
        self.config = cfg
        self._cwd = cwd
        self._data_dir: Optional[Path] = None
        self._catalog: Optional[List[Dict[str, Any]]] = None

    @property
    def data_dir(self) -> Path:
        """Lazy resolution of the data directory."""
        if self._data_dir is None:
            candidates = candidate_data_dirs(self.config, cwd=self._cwd)
            self._data_dir = resolve_data_dir(candidates)
        return self._data_dir

    @property
    def catalog(self) -> List[Dict[str, Any]]:
        """Lazy load of the Lama catalog."""
        if self._catalog is None:
            self._catalog = load_catalog(self.data_dir / self.config.index_file)
        return self._catalog

    def find_product(self, asin: str) -> Optional[Dict[str, Any]]:
        return find_product(self.catalog, asin)

    def read_review_text(self, asin: str, lang: str) -> str:
        return read_review_text(self.data_dir, asin, lang)
