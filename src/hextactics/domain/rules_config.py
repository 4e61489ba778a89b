"""Declarative rule tables for the simulation.

These are static lookups: terrain numbers, the unit catalog, structure hit
points and sight constants. Rule functions accept a ``rules`` keyword so
tests can swap in alternative tables.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .enums import StructureType, TerrainType, UnitClass

IMPASSABLE = math.inf


@dataclass(frozen=True, slots=True)
class TerrainProfile:
    """Gameplay numbers derived from a terrain type."""

    movement_cost: float
    defense_bonus: float = 0.0
    blocks_sight: bool = False
    elevation: int = 1
    water: bool = False


@dataclass(frozen=True, slots=True)
class UnitProfile:
    """Catalog entry describing a unit class."""

    max_hp: int
    move_range: int
    attack_range: int
    damage: int
    sight_range: int
    naval: bool = False


def _default_terrain() -> dict[TerrainType, TerrainProfile]:
    return {
        TerrainType.PLAINS: TerrainProfile(movement_cost=1),
        TerrainType.FOREST: TerrainProfile(movement_cost=2, defense_bonus=0.25, blocks_sight=True),
        TerrainType.MOUNTAIN: TerrainProfile(
            movement_cost=3, defense_bonus=0.5, blocks_sight=True, elevation=2
        ),
        TerrainType.WATER: TerrainProfile(movement_cost=1, elevation=0, water=True),
        TerrainType.SAND: TerrainProfile(movement_cost=2),
        # negative bonus: units standing in a swamp take more damage
        TerrainType.SWAMP: TerrainProfile(movement_cost=2, defense_bonus=-0.1, elevation=0),
    }


def _default_units() -> dict[UnitClass, UnitProfile]:
    return {
        UnitClass.WARRIOR: UnitProfile(
            max_hp=12, move_range=2, attack_range=1, damage=4, sight_range=3
        ),
        UnitClass.SPEARMAN: UnitProfile(
            max_hp=10, move_range=2, attack_range=1, damage=3, sight_range=3
        ),
        UnitClass.SCOUT: UnitProfile(max_hp=6, move_range=4, attack_range=1, damage=2, sight_range=5),
        UnitClass.HORSEMAN: UnitProfile(
            max_hp=10, move_range=4, attack_range=1, damage=4, sight_range=4
        ),
        UnitClass.SETTLER: UnitProfile(
            max_hp=5, move_range=2, attack_range=0, damage=0, sight_range=2
        ),
        UnitClass.SLINGER: UnitProfile(
            max_hp=6, move_range=2, attack_range=2, damage=2, sight_range=4
        ),
        UnitClass.GALLEY: UnitProfile(
            max_hp=10, move_range=3, attack_range=1, damage=3, sight_range=3, naval=True
        ),
    }


def _default_structure_hp() -> dict[StructureType, int]:
    return {
        StructureType.CITY: 50,
        StructureType.OUTPOST: 25,
        StructureType.FORT: 25,
        StructureType.FARM: 25,
    }


@dataclass(frozen=True, slots=True)
class TerrainRules:
    """Terrain table keyed by terrain type."""

    profiles: dict[TerrainType, TerrainProfile] = field(default_factory=_default_terrain)

    def profile(self, terrain: TerrainType) -> TerrainProfile:
        return self.profiles[terrain]


@dataclass(frozen=True, slots=True)
class UnitRules:
    """Unit catalog keyed by unit class."""

    profiles: dict[UnitClass, UnitProfile] = field(default_factory=_default_units)
    settler_class: UnitClass = UnitClass.SETTLER

    def profile(self, unit_class: UnitClass) -> UnitProfile:
        return self.profiles[unit_class]


@dataclass(frozen=True, slots=True)
class StructureRules:
    """Structure hit points and what a settler founds."""

    max_hp: dict[StructureType, int] = field(default_factory=_default_structure_hp)
    founded_type: StructureType = StructureType.CITY
    # terrain a settlement may never be founded on
    unsettleable: frozenset[TerrainType] = frozenset({TerrainType.WATER, TerrainType.MOUNTAIN})


@dataclass(frozen=True, slots=True)
class VisibilityRules:
    """Sight radii not carried by units."""

    structure_sight_range: int = 3


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    terrain: TerrainRules = TerrainRules()
    units: UnitRules = UnitRules()
    structures: StructureRules = StructureRules()
    visibility: VisibilityRules = VisibilityRules()


DEFAULT_RULES = RulesConfig()
