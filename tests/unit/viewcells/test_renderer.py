"""Tests for the CellRenderer facade."""

from unittest.mock import MagicMock

import pytest

import viewcells.renderer as renderer_module
from viewcells.base import Cell
from viewcells.caching import CachingDecorator
from viewcells.exceptions import CellNotFoundError
from viewcells.renderer import CellRenderer, get_cell_renderer


class TestCellRenderer:
    """Tests for creating and rendering cells by name."""

    def test_create_cell(self, renderer, controller, cell_registry):
        cell = renderer.create_cell(controller, "menu", {"a": 1})

        assert isinstance(cell, cell_registry.lookup("menu"))
        assert cell.controller is controller
        assert cell.params == {"a": 1}
        assert cell.renderer is renderer

    def test_unknown_cell_name(self, renderer, controller):
        with pytest.raises(CellNotFoundError):
            renderer.create_cell(controller, "ghost")

    def test_render_cell(self, renderer, controller):
        assert renderer.render_cell(controller, "menu", "show") == '<ul class="menu">Menu</ul>'

    def test_caching_for_uses_settings(self, make_renderer, controller):
        renderer = make_renderer(perform_caching=False, cache_expires_in=5)
        decorator = renderer.caching_for(renderer.create_cell(controller, "menu"))

        assert isinstance(decorator, CachingDecorator)
        assert decorator.enabled is False
        assert decorator.store_options == {"expires_in": 5}

    def test_store_options_empty_without_expiry(self, renderer):
        assert renderer.store_options == {}

    def test_resolver_uses_cell_roots(self, renderer, test_settings):
        assert renderer.resolver.roots == tuple(str(root) for root in test_settings.cell_roots)
        assert renderer.resolver.base_class is Cell

    def test_preload(self, renderer, cell_registry):
        renderer.preload()

        assert set(renderer.resolver._subdirectories) == set(cell_registry.classes())

    def test_custom_engine(self, test_settings, cell_registry, controller):
        engine = MagicMock()
        engine.render_file.return_value = "from engine"
        renderer = CellRenderer(settings=test_settings, registry=cell_registry, engine=engine)

        assert renderer.create_cell(controller, "menu").render_state("show") == "from engine"
        template, context, search_paths = engine.render_file.call_args.args
        assert template == "show.html"
        assert context["title"] == "Menu"
        assert search_paths[0].endswith("menu")


def test_default_renderer_singleton(monkeypatch, test_settings):
    monkeypatch.setattr(renderer_module, "_renderer_instance", None)
    monkeypatch.setattr(renderer_module, "get_settings", lambda: test_settings)

    renderer = get_cell_renderer()

    assert renderer is get_cell_renderer()
    assert renderer.settings is test_settings
