"""Border tiling - turns a border segment into rows of box-drawing glyphs.

A panel border is eight segments: four corners and four edges. Each segment
is tiled on its own; the ``top/right/bottom/left`` flags say which of its
sides continue into a neighbouring segment, so lines run across the seams
and nested borders join instead of overlapping.

Every cell gets a four-bit mask of the directions a line leaves it in
(N=8, E=4, S=2, W=1) and the glyph is looked up from the style's table:

- Between two cells of the segment a connection is drawn when the segment
  draws lines along that axis: always for SOLID fill, and for LINES fill only
  when a neighbour continues the segment along that axis.
- The first/last row and column always draw lines along an outer side that
  has no neighbour, so a lone segment frames itself.
- On the outer sides a connection leaves the cell only towards a neighbour.
"""

from __future__ import annotations

from tui_panels.layout.borders import BorderFill, BorderGlyphs
from tui_panels.errors import TilingError


def connection_mask(x: int, y: int, width: int, height: int, fill: BorderFill,
                    top: bool = False, right: bool = False,
                    bottom: bool = False, left: bool = False) -> int:
    """Return the N/E/S/W connection mask for cell (x, y) of a segment."""
    solid = fill is BorderFill.SOLID
    horizontal = solid or left or right
    vertical = solid or top or bottom

    row_lines = horizontal or (y == 0 and not top) or (y == height - 1 and not bottom)
    col_lines = vertical or (x == 0 and not left) or (x == width - 1 and not right)

    north = col_lines if y > 0 else top
    east = row_lines if x < width - 1 else right
    south = col_lines if y < height - 1 else bottom
    west = row_lines if x > 0 else left

    return north << 3 | east << 2 | south << 1 | west


def tile_border(
    width: int,
    height: int,
    fill: BorderFill,
    glyphs: BorderGlyphs,
    *,
    top: bool = False,
    right: bool = False,
    bottom: bool = False,
    left: bool = False,
) -> list[str]:
    """
    Tile a ``width`` x ``height`` border segment.

    Args:
        width: Segment width in cells
        height: Segment height in cells
        fill: SOLID draws the whole grid, LINES only the connecting lines
        glyphs: Glyph set to draw with
        top, right, bottom, left: Whether that side continues into a
            neighbouring segment

    Returns:
        ``height`` strings of ``width`` glyphs each, or an empty list when
        either dimension is zero.
    """
    fill = BorderFill.parse(fill)
    if width <= 0 or height <= 0:
        return []

    table = glyphs.table
    flags = (bool(top), bool(right), bool(bottom), bool(left))

    rows: list[str] = []
    for y in range(height):
        row: list[str] = []
        for x in range(width):
            mask = connection_mask(x, y, width, height, fill, *flags)
            if not 0 <= mask < len(table):
                raise TilingError(f"Connection mask {mask} out of range at ({x}, {y}) in {width}x{height}")
            row.append(table[mask])
        rows.append(''.join(row))
    return rows
