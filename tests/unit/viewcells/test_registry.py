"""Tests for the cell registry."""

import pytest

from viewcells.base import Cell
from viewcells.exceptions import CellNotFoundError, ErrorCode
from viewcells.registry import CellRegistry


class ArticleCell(Cell):
    pass


class TestCellRegistry:
    """Tests for CellRegistry."""

    def test_register_uses_cell_name(self):
        registry = CellRegistry()
        registry.register(ArticleCell)

        assert registry.lookup("article") is ArticleCell
        assert "article" in registry

    def test_register_with_name(self):
        registry = CellRegistry()
        registry.register(ArticleCell, name="news")

        assert registry.lookup("news") is ArticleCell

    def test_decorator_form(self):
        registry = CellRegistry()

        @registry.register(name="teaser")
        class TeaserCell(Cell):
            pass

        assert registry.lookup("teaser") is TeaserCell

    def test_bare_decorator(self):
        registry = CellRegistry()

        @registry.register
        class BannerCell(Cell):
            pass

        assert registry.lookup("banner") is BannerCell

    def test_unknown_name_raises(self):
        with pytest.raises(CellNotFoundError) as exc_info:
            CellRegistry().lookup("ghost")

        assert exc_info.value.code == ErrorCode.CELL_NOT_FOUND
        assert exc_info.value.status_code == 404

    def test_unregister(self):
        registry = CellRegistry()
        registry.register(ArticleCell)
        registry.unregister("article")

        assert "article" not in registry

    def test_only_classes(self):
        with pytest.raises(TypeError):
            CellRegistry().register(ArticleCell(None))

    def test_iteration(self):
        registry = CellRegistry()
        registry.register(ArticleCell)

        assert list(registry) == ["article"]
        assert registry.classes() == [ArticleCell]
        assert len(registry) == 1
