"""
Plain-text rendering of Reversi boards.
"""
from typing import Dict, Iterable, Mapping

from .errors import ConstructionError
from .geometry import Coordinate
from .grid import Grid
from .tiles import Tile

# ASCII characters only
ASCII_TILE_MAP: Mapping[Tile, str] = {
    Tile.WHITE: 'w',
    Tile.BLACK: 'b',
    Tile.EMPTY: '.',
}

# Dot characters that render correctly on most terminals
DOT_TILE_MAP: Mapping[Tile, str] = {
    Tile.WHITE: 'o',
    Tile.BLACK: '●',
    Tile.EMPTY: '·',
}

TILE_MAPS: Dict[str, Mapping[Tile, str]] = {
    'ascii': ASCII_TILE_MAP,
    'dot': DOT_TILE_MAP,
}


def render_grid(grid: Grid, tile_map: Mapping[Tile, str] = ASCII_TILE_MAP, indexed: bool = False) -> str:
    """
    Render a grid as one line per row, tiles separated by spaces.

    Args:
        grid: Grid to render
        tile_map: Symbol for each tile
        indexed: Prefix rows and head columns with their index

    Returns:
        The rendered board, without a trailing newline
    """
    if not indexed:
        return '\n'.join(
            ' '.join(tile_map[tile] for tile in grid.row(y))
            for y in range(grid.height)
        )

    cell = len(str(grid.width - 1))
    margin = len(str(grid.height - 1))
    lines = [' ' * margin + ' ' + ' '.join(str(x).rjust(cell) for x in range(grid.width))]
    for y in range(grid.height):
        cells = ' '.join(tile_map[tile].rjust(cell) for tile in grid.row(y))
        lines.append(f"{str(y).rjust(margin)} {cells}")
    return '\n'.join(lines)


def parse_layout(rows: Iterable[str], tile_map: Mapping[Tile, str] = ASCII_TILE_MAP) -> Grid:
    """
    Build a grid from text rows, one character per tile.

    Whitespace inside a row is ignored, so rendered boards parse back.

    Raises:
        ConstructionError: If the rows are empty, ragged or hold unknown symbols
    """
    symbols = {symbol: tile for tile, symbol in tile_map.items()}
    parsed = [[c for c in row if not c.isspace()] for row in rows]
    parsed = [row for row in parsed if row]

    if not parsed:
        raise ConstructionError("Layout is empty")
    width = len(parsed[0])
    if any(len(row) != width for row in parsed):
        raise ConstructionError("Layout rows must all have the same length")

    grid = Grid(width, len(parsed))
    for y, row in enumerate(parsed):
        for x, symbol in enumerate(row):
            if symbol not in symbols:
                raise ConstructionError(f"Unknown tile symbol {symbol!r} at {Coordinate(x, y)}")
            grid.set(Coordinate(x, y), symbols[symbol])
    return grid
