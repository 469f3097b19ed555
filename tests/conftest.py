"""Shared pytest fixtures for auto-tiling tests."""

from pathlib import Path

import pytest

from autotile.core.resolver import AutoTileResolver
from autotile.core.wang_table import WangTable
from autotile.formats.tileset import load_tileset


@pytest.fixture
def water_tileset_path():
    """Path to the bundled water tileset."""
    return Path(__file__).parent.parent / "data" / "tilesets" / "watertiles-auto.tsx"


@pytest.fixture
def water_tileset(water_tileset_path):
    """Load the bundled water tileset."""
    return load_tileset(water_tileset_path)


@pytest.fixture
def water_wang_set(water_tileset):
    """The 'water' Wang set."""
    return water_tileset.wang_set("water")


@pytest.fixture
def water_table(water_wang_set):
    """Wang table built from the water set."""
    return water_wang_set.table()


@pytest.fixture
def water_resolver(water_wang_set):
    """Resolver for the water set with default options."""
    return AutoTileResolver.from_wang_set(water_wang_set)


@pytest.fixture
def small_entries():
    """Hand-crafted entries: two single tiles and a two-tile variant group."""
    return [
        (0, [1, 0, 0, 0, 0, 0, 0, 0]),
        (1, [0, 0, 1, 0, 0, 0, 0, 0]),
        (6, [1, 0, 1, 0, 0, 0, 0, 0]),
        (5, [1, 0, 1, 0, 0, 0, 0, 0]),
    ]


@pytest.fixture
def small_table(small_entries):
    """Wang table built from small_entries with a single color."""
    return WangTable.build(small_entries, {1})


@pytest.fixture
def small_resolver(small_table):
    """Resolver over small_table with default options."""
    return AutoTileResolver(small_table)


def make_tsx(wangsets: str = "", **attrs) -> str:
    """Build a minimal tileset document for loader tests."""
    tileset_attrs = {
        "name": "test",
        "tilewidth": "16",
        "tileheight": "16",
        "tilecount": "12",
        "columns": "4",
    }
    tileset_attrs.update({k: str(v) for k, v in attrs.items()})
    attr_str = " ".join(f'{k}="{v}"' for k, v in tileset_attrs.items() if v != "None")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<tileset {attr_str}>\n"
        ' <image source="test.png" width="64" height="48"/>\n'
        f" <wangsets>{wangsets}</wangsets>\n"
        "</tileset>\n"
    )


@pytest.fixture
def tsx_factory():
    """Factory for minimal tileset documents."""
    return make_tsx
