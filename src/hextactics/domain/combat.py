"""Combat resolution rules.

Damage is flat: the defender loses the attacker's base damage. Tiles carry
a defense bonus, but resolution does not apply it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from hextactics.domain.models import Board, Unit, UnitID
from hextactics.utils.hex_math import HexCoord, hex_distance, hex_neighbors


@dataclass(slots=True)
class AttackResult:
    """Summary of a resolved attack."""

    attacker_id: UnitID
    defender_id: UnitID
    damage: int
    defender_hp: int
    destroyed: bool


def resolve_attack(attacker: Unit, defender: Unit) -> AttackResult:
    """Apply the attacker's damage to the defender and spend the attacker's action."""

    damage = max(0, attacker.damage)
    defender.hp -= damage
    attacker.has_acted = True
    return AttackResult(
        attacker_id=attacker.id,
        defender_id=defender.id,
        damage=damage,
        defender_hp=defender.hp,
        destroyed=not defender.alive,
    )


def attack_targets(
    unit: Unit,
    board: Board,
    unit_at: Callable[[HexCoord], Unit | None],
) -> list[HexCoord]:
    """Return hexes holding opposing units the unit can attack.

    Range 0 has no targets. Range 1 checks the six neighbors in their fixed
    order. Longer ranges scan the bounding square row by row and keep every
    opposing unit within hex distance ``attack_range``; line of sight is not
    checked.
    """

    if unit.attack_range <= 0:
        return []

    def _is_enemy(coord: HexCoord) -> bool:
        occupant = unit_at(coord)
        return occupant is not None and occupant.side != unit.side

    if unit.attack_range == 1:
        return [coord for coord in hex_neighbors(unit.position) if _is_enemy(coord)]

    reach = unit.attack_range
    origin = unit.position
    targets: list[HexCoord] = []
    for row in range(origin.row - reach, origin.row + reach + 1):
        for col in range(origin.col - reach, origin.col + reach + 1):
            coord = HexCoord(col=col, row=row)
            if coord == origin or not board.in_bounds(coord):
                continue
            if hex_distance(origin, coord) <= reach and _is_enemy(coord):
                targets.append(coord)
    return targets
