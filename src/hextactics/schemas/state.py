"""Read-only snapshot of a game for rendering."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hextactics.domain.enums import Phase, Side, StructureType, TerrainType, UnitClass
from hextactics.domain.models import Game
from hextactics.utils.hex_math import HexCoord


class CoordRead(BaseModel):
    model_config = ConfigDict(frozen=True)

    col: int = Field(..., description="Offset column")
    row: int = Field(..., description="Offset row")


class TileRead(BaseModel):
    col: int
    row: int
    terrain: TerrainType
    movement_cost: float = Field(..., description="Cost to enter (inf when impassable)")
    defense_bonus: float = Field(default=0.0, description="Stored, not applied by combat")
    blocks_sight: bool = Field(default=False, description="Stored, not applied by vision")
    visible: bool = Field(default=False, description="Currently seen by the vision side")
    explored: bool = Field(default=False, description="Seen at least once")


class UnitRead(BaseModel):
    id: int
    unit_class: UnitClass
    side: Side
    position: CoordRead
    hp: int
    max_hp: int = Field(..., ge=1)
    movement_remaining: float = Field(..., ge=0.0)
    has_acted: bool
    attack_range: int = Field(..., ge=0)
    sight_range: int = Field(..., ge=0)
    naval: bool = False


class StructureRead(BaseModel):
    id: int
    structure_type: StructureType
    side: Side
    position: CoordRead
    hp: int
    max_hp: int


class SelectionRead(BaseModel):
    unit_id: int | None = Field(None, description="Selected unit, if any")
    moves: list[CoordRead] = Field(default_factory=list)
    targets: list[CoordRead] = Field(default_factory=list)


class GameSnapshot(BaseModel):
    """Everything a renderer needs to draw one frame."""

    phase: Phase
    turn_number: int = Field(..., ge=1)
    ai_running: bool
    cols: int
    rows: int
    tiles: list[TileRead]
    units: list[UnitRead]
    structures: list[StructureRead]
    selection: SelectionRead

    @classmethod
    def from_game(cls, game: Game) -> GameSnapshot:
        return cls.model_validate(to_snapshot_dict(game))


def _coord_dict(coord: HexCoord) -> dict[str, int]:
    return {"col": coord.col, "row": coord.row}


def to_snapshot_dict(game: Game) -> dict[str, object]:
    """Copy the game state into plain data."""

    return {
        "phase": game.phase,
        "turn_number": game.turn_number,
        "ai_running": game.ai_running,
        "cols": game.board.cols,
        "rows": game.board.rows,
        "tiles": [
            {
                "col": tile.coord.col,
                "row": tile.coord.row,
                "terrain": tile.terrain,
                "movement_cost": tile.movement_cost,
                "defense_bonus": tile.defense_bonus,
                "blocks_sight": tile.blocks_sight,
                "visible": tile.visible,
                "explored": tile.explored,
            }
            for tile in game.board
        ],
        "units": [
            {
                "id": int(unit.id),
                "unit_class": unit.unit_class,
                "side": unit.side,
                "position": _coord_dict(unit.position),
                "hp": unit.hp,
                "max_hp": unit.max_hp,
                "movement_remaining": unit.movement_remaining,
                "has_acted": unit.has_acted,
                "attack_range": unit.attack_range,
                "sight_range": unit.sight_range,
                "naval": unit.naval,
            }
            for unit in game.units.values()
        ],
        "structures": [
            {
                "id": int(structure.id),
                "structure_type": structure.structure_type,
                "side": structure.side,
                "position": _coord_dict(structure.position),
                "hp": structure.hp,
                "max_hp": structure.max_hp,
            }
            for structure in game.structures.values()
        ],
        "selection": {
            "unit_id": int(game.selection.unit_id) if game.selection.unit_id is not None else None,
            "moves": [_coord_dict(c) for c in game.selection.moves],
            "targets": [_coord_dict(c) for c in game.selection.targets],
        },
    }
