"""Game and piece factories for hex-tactics.

This module creates games, units and structures with identifiers scoped to
their game, and places the standard starting rosters. Use these functions
rather than constructing the dataclasses directly so catalog values and id
counters stay consistent.

Example:
    from hextactics.domain.board import empty_board
    from hextactics.factory import new_game, spawn_starting_rosters

    game = new_game(empty_board(100, 80))
    spawn_starting_rosters(game)
"""

from __future__ import annotations

from hextactics.domain.enums import Side, StructureType, UnitClass
from hextactics.domain.models import Board, Game, Structure, StructureID, Unit, UnitID
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig
from hextactics.domain.visibility import refresh_visibility
from hextactics.utils.hex_math import HexCoord

STARTING_ROSTER: tuple[UnitClass, ...] = (UnitClass.SETTLER, UnitClass.WARRIOR)


def new_game(board: Board, *, vision_side: Side = Side.FRIENDLY) -> Game:
    """Create an empty game on the supplied board.

    Args:
        board: Terrain grid handed over by map generation
        vision_side: Side whose fog of war is tracked on the tiles

    Returns:
        Game in the friendly phase of turn 1 with no pieces
    """
    return Game(board=board, vision_side=vision_side)


def create_unit(
    game: Game,
    unit_class: UnitClass | str,
    side: Side,
    position: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Unit:
    """Create a unit from the catalog and add it to the game.

    Args:
        game: Game receiving the unit
        unit_class: Catalog entry (enum member or its value)
        side: Owning side
        position: Starting hex

    Returns:
        The new unit with full health and a fresh action economy

    Raises:
        ValueError: If ``unit_class`` is not a catalog entry
    """
    unit_class = UnitClass(unit_class)
    profile = rules.units.profile(unit_class)
    unit = Unit(
        id=UnitID(game.next_unit_id),
        unit_class=unit_class,
        side=side,
        position=position,
        hp=profile.max_hp,
        max_hp=profile.max_hp,
        move_range=profile.move_range,
        attack_range=profile.attack_range,
        damage=profile.damage,
        sight_range=profile.sight_range,
        naval=profile.naval,
        movement_remaining=profile.move_range,
    )
    game.next_unit_id += 1
    game.units[unit.id] = unit
    return unit


def create_structure(
    game: Game,
    structure_type: StructureType | str,
    side: Side,
    position: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Structure:
    """Create a structure and add it to the game.

    Args:
        game: Game receiving the structure
        structure_type: Structure classification
        side: Owning side
        position: Hex the structure occupies

    Returns:
        The new structure at full health
    """
    structure_type = StructureType(structure_type)
    max_hp = rules.structures.max_hp[structure_type]
    structure = Structure(
        id=StructureID(game.next_structure_id),
        structure_type=structure_type,
        side=side,
        position=position,
        hp=max_hp,
        max_hp=max_hp,
    )
    game.next_structure_id += 1
    game.structures[structure.id] = structure
    return structure


def starting_positions(cols: int, rows: int) -> dict[Side, list[tuple[HexCoord, HexCoord]]]:
    """Return (settler, warrior) spawn pairs for each side on a board of this size.

    The friendly side starts near the top-left corner. Hostile rosters start
    bottom-right, top-right, bottom-left and in the centre.
    """
    return {
        Side.FRIENDLY: [(HexCoord(col=5, row=5), HexCoord(col=6, row=5))],
        Side.HOSTILE: [
            (HexCoord(col=cols - 6, row=rows - 6), HexCoord(col=cols - 7, row=rows - 6)),
            (HexCoord(col=cols - 6, row=6), HexCoord(col=cols - 7, row=6)),
            (HexCoord(col=6, row=rows - 6), HexCoord(col=5, row=rows - 6)),
            (HexCoord(col=cols // 2, row=rows // 2), HexCoord(col=cols // 2 - 1, row=rows // 2)),
        ],
    }


def spawn_starting_rosters(game: Game, *, rules: RulesConfig = DEFAULT_RULES) -> list[Unit]:
    """Place a settler and a warrior at every spawn pair and reveal the map.

    Raises:
        ValueError: If the board is too small to hold every spawn point
    """
    board = game.board
    spawned: list[Unit] = []
    for side, pairs in starting_positions(board.cols, board.rows).items():
        for pair in pairs:
            for coord in pair:
                if not board.in_bounds(coord) or game.is_occupied(coord):
                    msg = f"spawn point {coord} is unusable on a {board.cols}x{board.rows} board"
                    raise ValueError(msg)
            for unit_class, coord in zip(STARTING_ROSTER, pair, strict=True):
                spawned.append(create_unit(game, unit_class, side, coord, rules=rules))

    refresh_visibility(game, rules=rules)
    return spawned
