"""Visibility domain logic.

Recomputes fog of war for one side from the positions and sight ranges of
its units and structures. Vision is a plain radius by hex distance; tiles
record whether they block sight but nothing here consults it.
"""

from __future__ import annotations

from collections.abc import Iterable

from hextactics.domain.enums import Side
from hextactics.domain.models import Board, Game, Structure, Unit
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig
from hextactics.utils.hex_math import HexCoord, hexes_in_range


def get_visible_hexes(center: HexCoord, radius: int) -> set[HexCoord]:
    """Get all hex coordinates within sight radius, including the centre."""

    return set(hexes_in_range(center, max(0, radius)))


def reveal_around(board: Board, center: HexCoord, radius: int) -> list[HexCoord]:
    """Mark every on-board tile within ``radius`` visible and explored."""

    revealed: list[HexCoord] = []
    for coord in get_visible_hexes(center, radius):
        tile = board.tile_at(coord)
        if tile is None:
            continue
        tile.visible = True
        tile.explored = True
        revealed.append(coord)
    return revealed


def update_visibility(
    board: Board,
    units: Iterable[Unit],
    structures: Iterable[Structure],
    side: Side,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> set[HexCoord]:
    """Recompute which tiles ``side`` currently sees.

    Every tile loses ``visible`` first (``explored`` is kept), then each live
    unit of the side reveals its sight range and each structure reveals the
    fixed structure range. This is a full pass, never incremental.

    Returns:
        The set of coordinates visible after the pass
    """

    for tile in board:
        tile.visible = False

    visible: set[HexCoord] = set()
    for unit in units:
        if unit.side != side or not unit.alive:
            continue
        visible.update(reveal_around(board, unit.position, unit.sight_range))

    for structure in structures:
        if structure.side != side:
            continue
        visible.update(
            reveal_around(board, structure.position, rules.visibility.structure_sight_range)
        )

    return visible


def refresh_visibility(game: Game, *, rules: RulesConfig = DEFAULT_RULES) -> set[HexCoord]:
    """Recompute the fog of war for the game's vision side."""

    return update_visibility(
        game.board,
        game.units.values(),
        game.structures.values(),
        game.vision_side,
        rules=rules,
    )
