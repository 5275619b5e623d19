"""
Catalog Store
-------------
Loading, normalising and querying the Lama catalog and blog texts.
Records are treated as read-only; nothing here mutates them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import BLOG_FILENAME_PATTERN, LITE_FIELDS
from ..errors import ConfigurationError, NotFoundError

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)


def normalize_catalog(parsed: Any) -> List[Dict[str, Any]]:
    """
    Turn any accepted catalog shape into a list of records.

    Accepted shapes:
        - [record, ...]
        - {"products": [record, ...]}
        - {asin: record, ...}  (asin filled from the key when missing)
    """
    if isinstance(parsed, list):
        entries = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("products"), list):
        entries = parsed["products"]
    elif isinstance(parsed, dict) and "products" not in parsed:
        entries = []
        for key, record in parsed.items():
            if isinstance(record, dict) and not record.get("asin"):
                record = {**record, "asin": key}
            entries.append(record)
    else:
        raise ConfigurationError(
            'Lama index must be an array, an object with a "products" array, '
            'or an object keyed by ASIN.'
        )

    records = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-object catalog entry at position {i}")
            continue
        records.append(entry)
    return records


def load_catalog(path: Path) -> List[Dict[str, Any]]:
    """Read and normalise the catalog file."""
    if not path.is_file():
        raise ConfigurationError(f"Lama index not found: {path}")

    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing {path.name}: {e}")

    records = normalize_catalog(parsed)
    logger.info(f"Loaded {len(records)} products from {path.name}")
    return records


def find_product(catalog: List[Dict[str, Any]], asin: str) -> Optional[Dict[str, Any]]:
    """Case-insensitive linear lookup; the first match wins."""
    wanted = str(asin).strip().lower()
    if not wanted:
        return None
    for record in catalog:
        if str(record.get("asin") or "").lower() == wanted:
            return record
    return None


def lite_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Project a record down to the public index fields."""
    return {field: record[field] for field in LITE_FIELDS if field in record}


def blog_filename(asin: str, lang: str) -> str:
    return BLOG_FILENAME_PATTERN.format(asin=asin, lang=lang.upper())


def read_review_text(data_dir: Path, asin: str, lang: str) -> str:
    """
    Read the long-form blog review for a product.

    Args:
        data_dir: Resolved Lama data directory
        asin: Product ASIN, as stored in the catalog
        lang: Language code (ES, EN, ...)

    Returns:
        The file contents, verbatim

    Raises:
        NotFoundError: if the blog file does not exist
    """
    filename = blog_filename(asin, lang)
    path = Path(data_dir) / filename
    if not path.is_file():
        raise NotFoundError(
            f"Blog text not found for ASIN {asin}: {filename}", missing=[asin]
        )
    return path.read_text(encoding="utf-8")
