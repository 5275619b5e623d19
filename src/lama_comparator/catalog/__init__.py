"""
Lama Catalog
============

Read-only access to the static Lama data bundled with the function:
- lama_index.json: statistical metadata for every product
- {ASIN}_{LANG}_blog.txt: long-form meta-review per product and language
"""

from .context import ComparatorContext
from .store import find_product, lite_record, read_review_text

__all__ = ["ComparatorContext", "find_product", "lite_record", "read_review_text"]
