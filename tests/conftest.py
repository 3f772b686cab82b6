"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from viewcells.base import Cell
from viewcells.cache import FragmentStore
from viewcells.compatibility import LegacyCellMixin
from viewcells.config import Settings
from viewcells.controller import HostContext
from viewcells.registry import CellRegistry
from viewcells.renderer import CellRenderer

FIXTURES_DIR = Path(__file__).parent / "fixtures"
VIEWS_DIR = FIXTURES_DIR / "views"


class MenuCell(Cell):
    def show(self):
        self.title = "Menu"

    def edit(self):
        pass

    def with_layout(self):
        self.title = "boxed"
        self.render(layout=True)

    def standard_layout(self):
        self.render(layout="standard")

    def text_in_layout(self):
        self.render(layout="standard", text="plain")

    def alternate(self):
        self.executed_alternate = True
        self.render(state="edit")

    def text_only(self):
        self.render(text="X")

    def suppressed(self):
        self.render(nothing=True)

    def twice(self):
        self.render(text="first")
        self.render(text="second")

    def render_then_redirect(self):
        self.render(text="first")
        self.redirect_to("show")

    def redirect_same(self):
        self.redirect_to("text_only")

    def redirect_other(self):
        self.redirect_to("test", "rendering_state", extra="1")

    def redirect_suppressed(self):
        self.redirect_to("suppressed")

    def missing_view(self):
        pass

    def plugin_view(self):
        pass

    def shared_view(self):
        pass

    def with_locals(self):
        self.render(locals={"who": "world"})

    def embed(self):
        pass

    def context_view(self):
        self.page = "p1"


class MainMenuCell(MenuCell):
    pass


class TestCell(Cell):
    def view_for_state(self, state):
        return str(VIEWS_DIR / f"{state}.html")

    def direct_output(self):
        self.render(text="<h9>this state method doesn't render a template but returns a string!</h9>")

    def rendering_state(self):
        self.instance_variable_one = "yeah"

    def another_rendering_state(self):
        self.instance_variable_one = "go"


class CellsTestOneCell(Cell):
    def super_state(self):
        self.my_class = type(self).__name__

    def instance_view(self):
        pass

    def view_for_state(self, state):
        if state == "instance_view":
            return "renamed_instance_view.html"
        return None

    def state_with_no_view(self):
        self.render(nothing=True)

    def cacheable(self, params):
        return True


CellsTestOneCell.caches("super_state", "instance_view", "state_with_no_view", condition="cacheable")


class CountingCell(Cell):
    calls = 0

    def tally(self):
        type(self).calls += 1
        self.count = type(self).calls

    def listing(self):
        type(self).calls += 1

    def stamp(self):
        type(self).calls += 1
        self.render(text=f"stamp {type(self).calls}")

    def silent(self):
        type(self).calls += 1
        self.render(nothing=True)

    def wants_cache(self, params):
        return params.get("cache") == "yes"


CountingCell.caches("tally", "silent")
CountingCell.caches("stamp", condition="wants_cache")
CountingCell.caches("listing", condition=lambda params: "page" in params)


class LegacyOldCell(LegacyCellMixin, Cell):
    def loud(self):
        return "<p>returned</p>"

    def quiet(self):
        return None

    def explicit(self):
        self.render(text="rendered")
        return "ignored"


ALL_CELLS = [MenuCell, MainMenuCell, TestCell, CellsTestOneCell, CountingCell, LegacyOldCell]


@pytest.fixture
def test_settings():
    """Settings pointing at the fixture cell roots."""
    return Settings(
        app_root=FIXTURES_DIR,
        overlay_roots=[FIXTURES_DIR / "plugin"],
        environment="test",
        perform_caching=True,
    )


@pytest.fixture
def cell_registry():
    """Registry holding every fixture cell."""
    registry = CellRegistry()
    for cell_class in ALL_CELLS:
        registry.register(cell_class)
    return registry


@pytest.fixture
def fragment_store():
    return FragmentStore()


@pytest.fixture
def renderer(test_settings, cell_registry, fragment_store):
    """CellRenderer wired to the fixture cells and a private fragment store."""
    CountingCell.calls = 0
    return CellRenderer(settings=test_settings, registry=cell_registry, fragment_store=fragment_store)


@pytest.fixture
def make_renderer(cell_registry, fragment_store):
    """Factory for renderers with overridden settings."""

    def _make(**overrides):
        values = {
            "app_root": FIXTURES_DIR,
            "overlay_roots": [FIXTURES_DIR / "plugin"],
            "environment": "test",
            "perform_caching": True,
        }
        values.update(overrides)
        CountingCell.calls = 0
        return CellRenderer(settings=Settings(**values), registry=cell_registry, fragment_store=fragment_store)

    return _make


@pytest.fixture
def controller():
    """Host context with request params and a session."""
    return HostContext(params={"page": "3"}, session={"user_id": 7})
