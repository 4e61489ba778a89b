"""Dataclasses describing every hex-tactics game entity.

The ``Game`` aggregate owns all mutable simulation state: the board, the
unit and structure collections, the current phase and the interactive
selection. Rule functions in the sibling modules receive a ``Game`` and
mutate it in place, so independent games can coexist in one process.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NewType

from hextactics.domain.pathfinding import MovementCostCache
from hextactics.utils.hex_math import HexCoord

from .enums import Phase, Side, StructureType, TerrainType, UnitClass

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", int)
StructureID = NewType("StructureID", int)


# --- Map ------------------------------------------------------------------------


@dataclass(slots=True)
class Tile:
    """Map hex tile.

    Terrain identity and the numbers derived from it are fixed at creation.
    Only ``visible`` and ``explored`` change during a game; ``explored`` never
    reverts to False and ``visible`` implies ``explored``.
    """

    coord: HexCoord
    terrain: TerrainType
    movement_cost: float
    defense_bonus: float = 0.0
    blocks_sight: bool = False
    elevation: int = 1
    water: bool = False
    visible: bool = False
    explored: bool = False

    @property
    def passable(self) -> bool:
        return not math.isinf(self.movement_cost)


@dataclass(slots=True)
class Board:
    """Terrain grid indexed as ``tiles[row][col]``."""

    tiles: list[list[Tile]]

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    def in_bounds(self, coord: HexCoord) -> bool:
        if coord.row < 0 or coord.row >= len(self.tiles):
            return False
        return 0 <= coord.col < len(self.tiles[coord.row])

    def tile_at(self, coord: HexCoord) -> Tile | None:
        if not self.in_bounds(coord):
            return None
        return self.tiles[coord.row][coord.col]

    def __iter__(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row


# --- Pieces ---------------------------------------------------------------------


@dataclass(slots=True)
class Unit:
    """A mobile piece owned by one side."""

    id: UnitID
    unit_class: UnitClass
    side: Side
    position: HexCoord
    hp: int
    max_hp: int
    move_range: int
    attack_range: int
    damage: int
    sight_range: int
    naval: bool = False
    movement_remaining: float = 0
    has_acted: bool = False

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def reset_action_economy(self) -> None:
        """Restore full movement and the single action for a new phase."""

        self.movement_remaining = self.move_range
        self.has_acted = False


@dataclass(slots=True)
class Structure:
    """A fixed building; it never moves or acts but projects sight."""

    id: StructureID
    structure_type: StructureType
    side: Side
    position: HexCoord
    hp: int
    max_hp: int


@dataclass(slots=True)
class Selection:
    """The selected unit and the hexes it may move to or attack."""

    unit_id: UnitID | None = None
    moves: list[HexCoord] = field(default_factory=list)
    targets: list[HexCoord] = field(default_factory=list)

    def clear(self) -> None:
        self.unit_id = None
        self.moves = []
        self.targets = []


# --- Aggregate ------------------------------------------------------------------


@dataclass(slots=True)
class Game:
    """Aggregate root holding the complete state of one game."""

    board: Board
    units: dict[UnitID, Unit] = field(default_factory=dict)
    structures: dict[StructureID, Structure] = field(default_factory=dict)
    phase: Phase = Phase.FRIENDLY
    turn_number: int = 1
    vision_side: Side = Side.FRIENDLY
    selection: Selection = field(default_factory=Selection)
    cost_cache: MovementCostCache = field(default_factory=MovementCostCache)
    generation: int = 0
    ai_running: bool = False
    next_unit_id: int = 1
    next_structure_id: int = 1

    def unit_at(self, coord: HexCoord) -> Unit | None:
        for unit in self.units.values():
            if unit.position == coord:
                return unit
        return None

    def structure_at(self, coord: HexCoord) -> Structure | None:
        for structure in self.structures.values():
            if structure.position == coord:
                return structure
        return None

    def is_occupied(self, coord: HexCoord) -> bool:
        return self.unit_at(coord) is not None

    def units_of(self, side: Side) -> list[Unit]:
        return [unit for unit in self.units.values() if unit.side == side]

    def structures_of(self, side: Side) -> list[Structure]:
        return [s for s in self.structures.values() if s.side == side]

    @property
    def selected_unit(self) -> Unit | None:
        if self.selection.unit_id is None:
            return None
        return self.units.get(self.selection.unit_id)

    def bump_generation(self) -> int:
        """Record a state mutation; cached searches from before it go stale."""

        self.generation += 1
        return self.generation
