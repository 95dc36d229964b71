# drawskrit/layout.py
"""
Grid geometry for drawskrit rows.

Every row of a layer is an equal-height band of the active rectangle and every
cell of a row an equal-width slice of that band. These pure functions turn a
(row, column) position plus size/orientation words into centre points, radii
and half extents in surface pixels.
"""
from dataclasses import dataclass
from typing import Tuple

from .model import Border


SIZE_FACTORS = {"tiny": 0.25, "small": 0.5, "big": 0.85, "huge": 1.0}
DEFAULT_SIZE_FACTOR = 0.75
LINE_WIDTHS = {"thin": 1.0, "thick": 4.0, "fat": 8.0}
VERTICAL_ROTATION = -90.0
ELONGATION = 0.8  # short half extent of elongated shapes relative to the long one

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


def active_rect(width: float, height: float, border: Border | None = None) -> Rect:
    """
    Returns the drawing area of a surface after applying a border inset.

    A border with a zero ratio (or no border at all) leaves the full surface.
    Otherwise each edge named in ``border.positions`` moves inwards by
    ``ratio`` times the surface dimension along that edge's axis; an empty
    position set insets all four edges.

    Examples:
        >>> active_rect(400, 200, Border(frozenset({"left", "right"}), 0.25))
        Rect(left=100.0, top=0, right=300.0, bottom=200)
    """
    if border is None or not border.ratio:
        return Rect(0, 0, width, height)
    ratio = border.ratio
    positions = border.positions or frozenset({"left", "right", "top", "bottom"})
    return Rect(
        left=ratio * width if "left" in positions else 0,
        top=ratio * height if "top" in positions else 0,
        right=width - ratio * width if "right" in positions else width,
        bottom=height - ratio * height if "bottom" in positions else height,
    )


def cell_size(rect: Rect, row_count: int, column_count: int) -> Tuple[float, float]:
    return rect.width / column_count, rect.height / row_count


def cell_center(rect: Rect, row: int, column: int, row_count: int, column_count: int) -> Point:
    cell_width, cell_height = cell_size(rect, row_count, column_count)
    return (rect.left + (column + 0.5) * cell_width,
            rect.top + (row + 0.5) * cell_height)


def size_factor(size: str | None) -> float:
    return SIZE_FACTORS.get(size, DEFAULT_SIZE_FACTOR)


def rotation(orientation: str | None) -> float:
    """Rotation in degrees applied to a shape drawn with the given orientation."""
    return VERTICAL_ROTATION if orientation == "vertical" else 0.0


def round_radius(cell_width: float, cell_height: float, size: str | None) -> float:
    """Radius of circles, squares, triangles and lines: they fit the cell's short side."""
    return min(cell_width, cell_height) / 2 * size_factor(size)


def half_extents(cell_width: float, cell_height: float, size: str | None,
                 orientation: str | None) -> Tuple[float, float]:
    """
    Half width and half height of rectangles, ellipses and smiles.

    The long axis runs along the cell width for horizontal shapes and along the
    cell height for vertical ones, and the short half extent is always
    ELONGATION times the long one. Extents are returned unrotated (half width
    is the long one); vertical shapes are then drawn rotated by -90 degrees,
    which stands them upright. The long extent shrinks when needed so the short
    one still fits across the cell.

    Examples:
        >>> half_extents(200, 100, None, "horizontal")
        (46.875, 37.5)
        >>> half_extents(200, 100, None, "vertical")
        (37.5, 30.0)
    """
    if orientation == "vertical":
        along, across = cell_height, cell_width
    else:
        along, across = cell_width, cell_height
    long_half = min(along, across / ELONGATION) / 2 * size_factor(size)
    return long_half, long_half * ELONGATION


def font_size(cell_width: float, cell_height: float, size: str | None) -> float:
    return min(cell_width, cell_height) / 8 * size_factor(size)


def line_width(width: str | None) -> float:
    return LINE_WIDTHS.get(width, LINE_WIDTHS["thin"])


def dash_pattern(line_style: str | None, width: str | None) -> Tuple[float, ...]:
    """Cairo dash pattern for a line style; solid lines have none."""
    w = line_width(width)
    if line_style == "dashed":
        return (3 * w,)
    if line_style == "dotted":
        return (w, w)
    return ()
