"""Enumerations used across the hex-tactics domain."""

from __future__ import annotations

from enum import StrEnum


class TerrainType(StrEnum):
    """Terrain types a tile can carry."""

    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    WATER = "water"
    SAND = "sand"
    SWAMP = "swamp"


class Side(StrEnum):
    """The two sides taking turns on the board."""

    FRIENDLY = "friendly"
    HOSTILE = "hostile"

    @property
    def opponent(self) -> Side:
        return Side.HOSTILE if self is Side.FRIENDLY else Side.FRIENDLY


class Phase(StrEnum):
    """Turn phases; each phase belongs to one side."""

    FRIENDLY = "friendly"
    HOSTILE = "hostile"

    @property
    def side(self) -> Side:
        return Side(self.value)


class UnitClass(StrEnum):
    """Unit catalog entries."""

    WARRIOR = "warrior"
    SPEARMAN = "spearman"
    SCOUT = "scout"
    HORSEMAN = "horseman"
    SETTLER = "settler"
    SLINGER = "slinger"
    GALLEY = "galley"


class StructureType(StrEnum):
    """Structure classifications."""

    CITY = "city"
    OUTPOST = "outpost"
    FORT = "fort"
    FARM = "farm"


class GameOutcome(StrEnum):
    """Result of the win/loss query from one side's point of view."""

    VICTORY = "victory"
    DEFEAT = "defeat"
