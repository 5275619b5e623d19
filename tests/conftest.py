"""
Shared fixtures: a temporary Lama data directory and ready-made contexts.
"""

import json

import pytest

from lama_comparator.config import ComparatorConfig
from lama_comparator.catalog import ComparatorContext
from lama_comparator.utils import secrets


CATALOG = [
    {
        "asin": "B0AAAAAAA1",
        "nombre_producto": "Cafetera express",
        "market": "ES",
        "categoria_inferida": "cocina",
        "n_reviews": 1200,
        "mean_stars": 4.5,
        "stars_pct": {"5": 70, "4": 15, "3": 7, "2": 3, "1": 5},
        "lama_lb95": 4.41,
        "lama_ub95": 4.58,
        "prob_chasco": 0.06,
        "fecha_ultima_review": "2024-09-01",
        "top_pros": ["crema densa"],
        "top_contras": ["deposito pequeno"],
        "tags_tematica": ["cafe"],
    },
    {
        "asin": "B0BBBBBBB2",
        "nombre_producto": "Cafetera de capsulas",
        "market": "ES",
        "categoria_inferida": "cocina",
        "n_reviews": 640,
        "mean_stars": 4.0,
        "stars_pct": {"5": 50, "4": 22, "3": 12, "2": 6, "1": 10},
        "lama_lb95": 3.88,
        "lama_ub95": 4.11,
        "prob_chasco": 0.15,
        "fecha_ultima_review": "2024-08-12",
        "top_pros": ["comoda"],
        "top_contras": ["capsulas caras"],
        "tags_tematica": ["cafe", "capsulas"],
    },
    {
        "asin": "GOOD",
        "nombre_producto": "Producto con blog",
        "market": "ES",
        "n_reviews": 10,
        "mean_stars": 3.9,
    },
    {
        "asin": "MISSING",
        "nombre_producto": "Producto sin blog",
        "market": "ES",
        "n_reviews": 5,
        "mean_stars": 3.1,
    },
]

BLOGS = {
    "B0AAAAAAA1": "Blog largo de la cafetera express.",
    "B0BBBBBBB2": "Blog largo de la cafetera de capsulas.",
    "GOOD": "Blog del producto bueno.",
}


@pytest.fixture
def catalog_records():
    return [dict(record) for record in CATALOG]


@pytest.fixture
def data_dir(tmp_path):
    """Data directory holding lama_index.json and the ES blog texts."""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "lama_index.json").write_text(json.dumps(CATALOG), encoding="utf-8")
    for asin, text in BLOGS.items():
        (directory / f"{asin}_ES_blog.txt").write_text(text, encoding="utf-8")
    return directory


@pytest.fixture
def cfg(data_dir):
    return ComparatorConfig(data_dir=str(data_dir), gemini_api_key="test-key")


@pytest.fixture
def ctx(cfg, tmp_path):
    return ComparatorContext(cfg, cwd=tmp_path)


@pytest.fixture(autouse=True)
def clear_secret_cache():
    secrets._SECRET_CACHE.clear()
    yield
    secrets._SECRET_CACHE.clear()
