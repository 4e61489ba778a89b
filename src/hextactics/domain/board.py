"""Board construction.

Procedural map generation lives outside the simulation; it hands over a
terrain grid. These helpers turn terrain identities into tiles using the
terrain table and build uniform or scripted boards.
"""

from __future__ import annotations

from collections.abc import Sequence

from hextactics.domain.enums import TerrainType
from hextactics.domain.models import Board, Tile
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig
from hextactics.utils.hex_math import HexCoord

# Single-letter terrain codes for scripted boards.
TERRAIN_CODES: dict[str, TerrainType] = {
    ".": TerrainType.PLAINS,
    "f": TerrainType.FOREST,
    "m": TerrainType.MOUNTAIN,
    "~": TerrainType.WATER,
    "s": TerrainType.SAND,
    "w": TerrainType.SWAMP,
}


def create_tile(
    coord: HexCoord,
    terrain: TerrainType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Tile:
    """Create an unexplored tile carrying the terrain's gameplay numbers."""

    profile = rules.terrain.profile(terrain)
    return Tile(
        coord=coord,
        terrain=terrain,
        movement_cost=profile.movement_cost,
        defense_bonus=profile.defense_bonus,
        blocks_sight=profile.blocks_sight,
        elevation=profile.elevation,
        water=profile.water,
    )


def board_from_terrain(
    grid: Sequence[Sequence[TerrainType]],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Board:
    """Build a board from a terrain grid indexed as ``grid[row][col]``."""

    tiles = [
        [
            create_tile(HexCoord(col=col, row=row), terrain, rules=rules)
            for col, terrain in enumerate(line)
        ]
        for row, line in enumerate(grid)
    ]
    return Board(tiles=tiles)


def empty_board(
    cols: int,
    rows: int,
    terrain: TerrainType = TerrainType.PLAINS,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Board:
    """Build a board filled with a single terrain type."""

    if cols <= 0 or rows <= 0:
        msg = f"Board dimensions must be positive, got {cols}x{rows}"
        raise ValueError(msg)
    return board_from_terrain([[terrain] * cols for _ in range(rows)], rules=rules)


def board_from_rows(rows: Sequence[str], *, rules: RulesConfig = DEFAULT_RULES) -> Board:
    """Build a board from strings of terrain codes, one string per row.

    Example:
        >>> board = board_from_rows(["..f", "~~m"])
        >>> board.tile_at(HexCoord(col=2, row=1)).terrain
        <TerrainType.MOUNTAIN: 'mountain'>
    """

    grid: list[list[TerrainType]] = []
    for line in rows:
        try:
            grid.append([TERRAIN_CODES[code] for code in line])
        except KeyError as exc:
            msg = f"unknown terrain code {exc.args[0]!r}"
            raise ValueError(msg) from exc
    return board_from_terrain(grid, rules=rules)
