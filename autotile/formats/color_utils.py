"""
Wang Auto-Tiling - Color and List String Utilities

Parsing and formatting helpers for the string-encoded values found in
tileset files: "#RRGGBB" colors and comma-separated wang ids.
"""

from typing import List, Tuple

RGBColor = Tuple[int, int, int]


def parse_color(color_str: str) -> RGBColor:
    """
    Parse a Tiled color string to an RGB tuple.

    Accepts "#RRGGBB" and "#AARRGGBB" (alpha is dropped); the leading
    "#" is optional.

    Args:
        color_str: Color string (e.g., "#0000ff")

    Returns:
        (r, g, b) tuple of ints 0-255

    Raises:
        ValueError: If the string is not a valid color

    Example:
        >>> parse_color("#0000ff")
        (0, 0, 255)
    """
    digits = color_str.strip().lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid color {color_str!r}: expected #RRGGBB or #AARRGGBB")
    try:
        value = int(digits, 16)
    except ValueError:
        raise ValueError(f"Invalid color {color_str!r}: not hexadecimal") from None
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def format_color(color: RGBColor) -> str:
    """
    Format an RGB tuple as a lowercase "#rrggbb" string.

    Example:
        >>> format_color((0, 0, 255))
        '#0000ff'
    """
    return "#" + "".join(f"{c:02x}" for c in color)


def parse_int_list(list_str: str) -> List[int]:
    """
    Parse a comma-separated list of integers.

    Args:
        list_str: Comma-separated integers (e.g., "1,0,1,0,1,0,1,1")

    Returns:
        List of integer values

    Raises:
        ValueError: If any item is not an integer

    Example:
        >>> parse_int_list("1,0,1,0,1,0,1,1")
        [1, 0, 1, 0, 1, 0, 1, 1]
    """
    return [int(x) for x in list_str.split(",")]


def format_int_list(values: List[int]) -> str:
    """
    Format integers as a comma-separated string.

    Example:
        >>> format_int_list([1, 0, 1, 0, 1, 0, 1, 1])
        '1,0,1,0,1,0,1,1'
    """
    return ",".join(str(v) for v in values)
