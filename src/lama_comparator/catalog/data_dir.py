"""
Data Directory Resolution
-------------------------
Serverless bundlers place static assets in different places depending on
the platform (Netlify, Lambda zip, local checkout), so the data directory
is searched for in a fixed order.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from ..config import ComparatorConfig
from ..errors import ConfigurationError

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def candidate_data_dirs(cfg: ComparatorConfig, cwd: Optional[Path] = None) -> List[Path]:
    """
    Build the ordered list of directories that may hold the Lama data.

    Args:
        cfg: Comparator configuration (LAMA_DATA_DIR, LAMBDA_TASK_ROOT)
        cwd: Working directory override (defaults to os.getcwd())

    Returns:
        De-duplicated candidate paths, most specific first
    """
    cwd = Path(cwd) if cwd is not None else Path(os.getcwd())
    task_root = Path(cfg.lambda_task_root)

    candidates = []
    if cfg.data_dir:
        candidates.append(Path(cfg.data_dir))
    candidates.extend([
        PACKAGE_DIR / "data",
        cwd / "data",
        cwd / "netlify" / "functions" / "data",
        task_root / "data",
        task_root / "netlify" / "functions" / "data",
    ])

    seen = set()
    unique = []
    for path in candidates:
        key = str(path)
        if key not in seen:
            seen.add(key)
            unique.append(path)
    return unique


def resolve_data_dir(candidates: List[Path]) -> Path:
    """Return the first candidate that is an existing directory."""
    for path in candidates:
        if path.is_dir():
            logger.info(f"Using Lama data directory: {path}")
            return path

    tried = ", ".join(str(p) for p in candidates)
    raise ConfigurationError(f"Lama data directory not found. Tried: {tried}")
