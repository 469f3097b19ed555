"""
Wang Auto-Tiling - Tileset Data Model

Read-only records for a Tiled tileset (.tsx) and its Wang sets, plus a
loader for the subset of the format they need: tileset attributes, the
source image and the <wangsets> block.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ..core.constants import NO_TILE, WANG_TYPE_MIXED, Signature
from ..core.errors import TilesetFormatError
from ..core.wang_table import WangTable
from .color_utils import RGBColor, parse_color, parse_int_list


@dataclass(frozen=True)
class WangColor:
    """A named terrain class within a Wang set."""

    id: int
    name: str
    color: RGBColor
    tile: int = NO_TILE
    probability: float = 1.0


@dataclass(frozen=True)
class WangTile:
    """A tile and its 8-slot Wang signature."""

    tile_id: int
    wang_id: tuple[int, ...]


@dataclass(frozen=True)
class WangSet:
    """
    A set of Wang colors and the tiles that carry them.

    Colors are keyed by id; ids are assigned 1..n from declaration order
    when the set is loaded.
    """

    name: str
    type: str = WANG_TYPE_MIXED
    tile: int = NO_TILE
    colors: Mapping[int, WangColor] = field(default_factory=dict, hash=False)
    tiles: tuple[WangTile, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    @property
    def color_ids(self) -> frozenset[int]:
        return frozenset(self.colors)

    def entries(self) -> list[tuple[int, tuple[int, ...]]]:
        """(tile_id, signature) pairs in declaration order."""
        return [(t.tile_id, t.wang_id) for t in self.tiles]

    def table(self, check_consistency: bool = True) -> WangTable:
        """
        Build the Wang table for this set.

        Raises:
            MalformedSignature: If a wang tile has a malformed signature
            UnknownColorReference: If a wang tile references an undeclared color
        """
        return WangTable.build(
            self.entries(),
            self.color_ids,
            wang_type=self.type,
            check_consistency=check_consistency,
        )

    def tile_probability(self, tile_id: int) -> float:
        """
        Relative probability of a tile: the product of the probabilities of
        every color its signature references. Tiles not in the set get 1.0.
        """
        probability = 1.0
        for tile in self.tiles:
            if tile.tile_id != tile_id:
                continue
            for slot in tile.wang_id:
                color = self.colors.get(slot)
                if color is not None:
                    probability *= color.probability
            break
        return probability

    def signature_of(self, tile_id: int) -> Signature | None:
        for tile in self.tiles:
            if tile.tile_id == tile_id:
                return tile.wang_id  # type: ignore[return-value]
        return None


@dataclass(frozen=True)
class Tileset:
    """
    A grid-sliced source image plus its Wang sets.

    Tile ids are assigned row-major from the image grid:
    id = row * columns + col.
    """

    name: str
    tile_width: int
    tile_height: int
    tile_count: int
    columns: int
    image_source: str | None = None
    image_width: int = 0
    image_height: int = 0
    spacing: int = 0
    margin: int = 0
    wang_sets: tuple[WangSet, ...] = ()
    source: str | None = None

    @property
    def rows(self) -> int:
        if self.columns <= 0:
            return 0
        return -(-self.tile_count // self.columns)

    def _check_tile_id(self, tile_id: int) -> None:
        if tile_id < 0 or tile_id >= self.tile_count:
            raise ValueError(
                f"Tile id {tile_id} out of range for tileset '{self.name}' "
                f"(0-{self.tile_count - 1})"
            )
        if self.columns <= 0:
            raise ValueError(f"Tileset '{self.name}' has no columns")

    def tile_position(self, tile_id: int) -> tuple[int, int]:
        """
        Grid position of a tile in the source image.

        Returns:
            (row, col)

        Raises:
            ValueError: If tile_id is outside the tileset
        """
        self._check_tile_id(tile_id)
        return divmod(tile_id, self.columns)

    def tile_rect(self, tile_id: int) -> tuple[int, int, int, int]:
        """
        Pixel rectangle of a tile in the source image.

        Returns:
            (x, y, width, height)

        Raises:
            ValueError: If tile_id is outside the tileset
        """
        row, col = self.tile_position(tile_id)
        x = self.margin + col * (self.tile_width + self.spacing)
        y = self.margin + row * (self.tile_height + self.spacing)
        return (x, y, self.tile_width, self.tile_height)

    def wang_set(self, name: str | None = None) -> WangSet:
        """
        Look up a Wang set by name (the first set when name is None).

        Raises:
            KeyError: If no Wang set matches
        """
        if name is None:
            if not self.wang_sets:
                raise KeyError(f"Tileset '{self.name}' has no Wang sets")
            return self.wang_sets[0]
        for wang_set in self.wang_sets:
            if wang_set.name == name:
                return wang_set
        available = ", ".join(ws.name for ws in self.wang_sets) or "none"
        raise KeyError(f"No Wang set named '{name}' in tileset '{self.name}' (available: {available})")


# =============================================================================
# Loading
# =============================================================================

def _int_attr(elem: ET.Element, name: str, default: int | None = None) -> int:
    value = elem.get(name)
    if value is None:
        if default is None:
            raise TilesetFormatError(f"<{elem.tag}> is missing required attribute '{name}'")
        return default
    try:
        return int(value)
    except ValueError:
        raise TilesetFormatError(
            f"<{elem.tag}> attribute '{name}' is not an integer: {value!r}"
        ) from None


def _float_attr(elem: ET.Element, name: str, default: float) -> float:
    value = elem.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise TilesetFormatError(
            f"<{elem.tag}> attribute '{name}' is not a number: {value!r}"
        ) from None


def _parse_wang_set(elem: ET.Element) -> WangSet:
    name = elem.get("name", "")

    colors: dict[int, WangColor] = {}
    for color_id, color_elem in enumerate(elem.findall("wangcolor"), start=1):
        try:
            rgb = parse_color(color_elem.get("color", "#000000"))
        except ValueError as e:
            raise TilesetFormatError(f"Wang set '{name}' color {color_id}: {e}") from None
        colors[color_id] = WangColor(
            id=color_id,
            name=color_elem.get("name", ""),
            color=rgb,
            tile=_int_attr(color_elem, "tile", NO_TILE),
            probability=_float_attr(color_elem, "probability", 1.0),
        )

    tiles = []
    for tile_elem in elem.findall("wangtile"):
        tile_id = _int_attr(tile_elem, "tileid")
        wang_id_str = tile_elem.get("wangid")
        if wang_id_str is None:
            raise TilesetFormatError(f"Wang set '{name}' tile {tile_id} has no wangid")
        try:
            wang_id = tuple(parse_int_list(wang_id_str))
        except ValueError:
            raise TilesetFormatError(
                f"Wang set '{name}' tile {tile_id}: wangid is not a list of integers: {wang_id_str!r}"
            ) from None
        tiles.append(WangTile(tile_id=tile_id, wang_id=wang_id))

    return WangSet(
        name=name,
        type=elem.get("type", WANG_TYPE_MIXED),
        tile=_int_attr(elem, "tile", NO_TILE),
        colors=colors,
        tiles=tuple(tiles),
    )


def parse_tileset(xml_text: str | bytes, source: str | None = None) -> Tileset:
    """
    Parse a tileset document.

    Args:
        xml_text: Contents of a .tsx file
        source: Where the document came from (kept for error messages)

    Returns:
        Tileset with all Wang sets loaded

    Raises:
        TilesetFormatError: If the document is not a well-formed tileset
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise TilesetFormatError(f"Invalid tileset XML{f' in {source}' if source else ''}: {e}") from None

    if root.tag != "tileset":
        raise TilesetFormatError(f"Expected <tileset> root element, found <{root.tag}>")

    image_source = None
    image_width = 0
    image_height = 0
    img_elem = root.find("image")
    if img_elem is not None:
        image_source = img_elem.get("source")
        image_width = _int_attr(img_elem, "width", 0)
        image_height = _int_attr(img_elem, "height", 0)

    wang_sets = []
    wangsets_elem = root.find("wangsets")
    if wangsets_elem is not None:
        for ws_elem in wangsets_elem.findall("wangset"):
            wang_sets.append(_parse_wang_set(ws_elem))

    return Tileset(
        name=root.get("name", ""),
        tile_width=_int_attr(root, "tilewidth"),
        tile_height=_int_attr(root, "tileheight"),
        tile_count=_int_attr(root, "tilecount"),
        columns=_int_attr(root, "columns"),
        image_source=image_source,
        image_width=image_width,
        image_height=image_height,
        spacing=_int_attr(root, "spacing", 0),
        margin=_int_attr(root, "margin", 0),
        wang_sets=tuple(wang_sets),
        source=source,
    )


def load_tileset(path: str | Path) -> Tileset:
    """
    Load a tileset from a .tsx file.

    Raises:
        FileNotFoundError: If the file does not exist
        TilesetFormatError: If the file is not a well-formed tileset
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tileset file not found: {path}")

    with open(path, "rb") as f:
        data = f.read()

    return parse_tileset(data, source=str(path))
