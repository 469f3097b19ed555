"""
Wang Auto-Tiling - Exceptions

Structural data errors raised while building Wang tables or loading
tilesets, and the recoverable no-candidate condition raised by the
resolver.
"""


class WangSetError(Exception):
    """Base class for all auto-tiling errors."""

    pass


class MalformedSignature(WangSetError):
    """Raised when a Wang tile entry cannot be placed in a table."""

    def __init__(self, message: str, tile_id=None, signature=None):
        self.tile_id = tile_id
        self.signature = signature
        super().__init__(message)


class UnknownColorReference(MalformedSignature):
    """Raised when a signature slot names a color the Wang set never declared."""

    def __init__(self, tile_id, signature, color_id: int, declared):
        self.color_id = color_id
        self.declared = tuple(sorted(declared))
        where = f"Tile {tile_id}: signature" if tile_id is not None else "Signature"
        super().__init__(
            f"{where} {list(signature)} references undeclared "
            f"color {color_id} (declared: {list(self.declared)})",
            tile_id=tile_id,
            signature=signature,
        )


class NoTileForSignature(WangSetError):
    """Raised when neither exact lookup nor fallback yields a tile."""

    def __init__(self, signature, reason: str = "table is empty"):
        self.signature = tuple(signature)
        super().__init__(f"No tile for signature {list(self.signature)}: {reason}")


class TilesetFormatError(WangSetError):
    """Raised when a tileset document is structurally invalid."""

    pass
