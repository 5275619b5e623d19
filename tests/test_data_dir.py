"""
Unit tests for data directory resolution and the comparator context
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from lama_comparator.catalog import ComparatorContext
from lama_comparator.catalog.data_dir import (
    PACKAGE_DIR,
    candidate_data_dirs,
    resolve_data_dir,
)
from lama_comparator.config import ComparatorConfig
from lama_comparator.errors import ConfigurationError


class TestCandidateDataDirs:
    """Candidate ordering and de-duplication."""

    def test_order_with_explicit_data_dir(self, tmp_path):
        cfg = ComparatorConfig(data_dir="/opt/lama", lambda_task_root="/var/task")

        candidates = candidate_data_dirs(cfg, cwd=tmp_path)

        assert candidates == [
            Path("/opt/lama"),
            PACKAGE_DIR / "data",
            tmp_path / "data",
            tmp_path / "netlify" / "functions" / "data",
            Path("/var/task/data"),
            Path("/var/task/netlify/functions/data"),
        ]

    def test_without_explicit_data_dir(self, tmp_path):
        cfg = ComparatorConfig(lambda_task_root="/var/task")

        candidates = candidate_data_dirs(cfg, cwd=tmp_path)

        assert candidates[0] == PACKAGE_DIR / "data"
        assert len(candidates) == 5

    def test_duplicates_removed(self):
        cfg = ComparatorConfig(lambda_task_root="/var/task")

        candidates = candidate_data_dirs(cfg, cwd=Path("/var/task"))

        assert candidates.count(Path("/var/task/data")) == 1
        assert candidates.count(Path("/var/task/netlify/functions/data")) == 1


class TestResolveDataDir:
    """First existing directory wins."""

    def test_first_existing_directory(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        second.mkdir()
        third = tmp_path / "third"
        third.mkdir()

        assert resolve_data_dir([first, second, third]) == second

    def test_files_are_not_directories(self, tmp_path):
        not_a_dir = tmp_path / "data"
        not_a_dir.write_text("x")
        real = tmp_path / "real"
        real.mkdir()

        assert resolve_data_dir([not_a_dir, real]) == real

    def test_none_exist_lists_every_path(self, tmp_path):
        candidates = [tmp_path / "a", tmp_path / "b"]

        with pytest.raises(ConfigurationError) as exc:
            resolve_data_dir(candidates)

        assert str(tmp_path / "a") in str(exc.value)
        assert str(tmp_path / "b") in str(exc.value)
        assert exc.value.status_code == 500


class TestComparatorContext:
    """The context memoises the data directory and the catalog."""

    def test_data_dir_uses_configured_directory(self, ctx, data_dir):
        assert ctx.data_dir == data_dir

    def test_catalog_loaded_once(self, ctx, catalog_records):
        with patch(
            "lama_comparator.catalog.context.load_catalog",
            return_value=catalog_records,
        ) as mock_load:
            first = ctx.catalog
            second = ctx.catalog

        assert first is second
        mock_load.assert_called_once_with(ctx.data_dir / "lama_index.json")

    def test_data_dir_resolved_once(self, cfg, tmp_path, data_dir):
        context = ComparatorContext(cfg, cwd=tmp_path)

        with patch(
            "lama_comparator.catalog.context.resolve_data_dir",
            return_value=data_dir,
        ) as mock_resolve:
            context.data_dir
            context.data_dir

        mock_resolve.assert_called_once()

    def test_find_product_and_read_text(self, ctx):
        product = ctx.find_product("good")

        assert product["asin"] == "GOOD"
        assert ctx.read_review_text("GOOD", "ES") == "Blog del producto bueno."
