"""Action rules for hex-tactics.

Every mutating operation here has a paired predicate with identical
preconditions and returns an ``ActionResult``; a failed result leaves the
game untouched. Successful mutations bump the game generation so cached
reachability searches from before the mutation are recognised as stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hextactics import factory
from hextactics.domain import combat
from hextactics.domain.enums import GameOutcome, Side
from hextactics.domain.models import Game, Unit
from hextactics.domain.pathfinding import find_reachable
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig
from hextactics.domain.visibility import refresh_visibility
from hextactics.utils.hex_math import HexCoord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActionResult:
    """Outcome of an action."""

    success: bool
    detail: str | None = None
    events: list[dict[str, object]] = field(default_factory=list)


class UnknownUnitError(LookupError):
    """Raised when an action names a unit that is not part of the game."""


def _failure(detail: str) -> ActionResult:
    logger.debug("action rejected: %s", detail)
    return ActionResult(False, detail)


def _require_unit(game: Game, unit: Unit) -> Unit:
    if game.units.get(unit.id) is not unit:
        msg = f"unit {int(unit.id)} is not part of this game"
        logger.warning(msg)
        raise UnknownUnitError(msg)
    return unit


def _in_game(game: Game, unit: Unit) -> bool:
    return game.units.get(unit.id) is unit and unit.alive


def _coord(coord: HexCoord) -> tuple[int, int]:
    return coord.col, coord.row


# ---------------------------------------------------------------------------
# Queries


def reachable_hexes(game: Game, unit: Unit) -> list[HexCoord]:
    """Search the hexes ``unit`` can reach and cache the costs for it."""

    area = find_reachable(unit, game.board, game.is_occupied)
    game.cost_cache.store(unit.id, game.generation, area.costs)
    return area.hexes


def movement_cost(game: Game, coord: HexCoord) -> float:
    """Return the cost to reach ``coord`` according to the last search."""

    return game.cost_cache.cost_to(coord)


def attackable_targets(game: Game, unit: Unit) -> list[HexCoord]:
    """Return hexes holding opposing units within the unit's attack range."""

    return combat.attack_targets(unit, game.board, game.unit_at)


def check_outcome(game: Game, side: Side = Side.FRIENDLY) -> GameOutcome | None:
    """Return the result of the game from ``side``'s point of view.

    The side wins when the opposing side has no units left and loses when it
    has none itself. Victory is checked first.
    """

    if not game.units_of(side.opponent):
        return GameOutcome.VICTORY
    if not game.units_of(side):
        return GameOutcome.DEFEAT
    return None


# ---------------------------------------------------------------------------
# Selection


def select_unit(game: Game, unit: Unit) -> ActionResult:
    """Select a unit of the active side and derive its move and target sets."""

    _require_unit(game, unit)
    if game.ai_running:
        return _failure("the hostile phase is running")
    if unit.side != game.phase.side:
        return _failure(f"it is not the {unit.side} side's phase")

    game.cost_cache.clear()
    game.selection.unit_id = unit.id
    game.selection.moves = reachable_hexes(game, unit) if unit.movement_remaining > 0 else []
    game.selection.targets = attackable_targets(game, unit) if not unit.has_acted else []
    return ActionResult(True, events=[{"type": "select", "unit_id": int(unit.id)}])


def deselect(game: Game) -> None:
    """Clear the selection and the cost cache tied to it."""

    game.selection.clear()
    game.cost_cache.clear()


# ---------------------------------------------------------------------------
# Movement


def _reachable_costs(game: Game, unit: Unit) -> dict[HexCoord, float]:
    # read-only: a search for another unit must not replace the cached one
    if game.cost_cache.is_fresh_for(unit.id, game.generation):
        return game.cost_cache.costs or {}
    return find_reachable(unit, game.board, game.is_occupied).costs


def can_move_to(game: Game, unit: Unit, destination: HexCoord) -> bool:
    """Return True if ``destination`` is in the unit's reachable set."""

    if not _in_game(game, unit) or unit.movement_remaining <= 0:
        return False
    if destination == unit.position:
        return False
    return destination in _reachable_costs(game, unit)


def move_unit(
    game: Game,
    unit: Unit,
    destination: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Move a unit and charge the cost its reachability search paid.

    Afterwards the fog of war is refreshed if the mover belongs to the vision
    side. A selected mover gets fresh move and target sets, and is deselected
    once it has neither movement nor an action left.
    """

    _require_unit(game, unit)
    if not can_move_to(game, unit, destination):
        return _failure(f"{destination} is not reachable for unit {int(unit.id)}")

    if not game.cost_cache.is_fresh_for(unit.id, game.generation):
        reachable_hexes(game, unit)
    cost = game.cost_cache.cost_to(destination, unit_id=unit.id, generation=game.generation)
    origin = unit.position
    unit.position = destination
    unit.movement_remaining -= cost
    game.bump_generation()
    logger.debug(
        "unit %s moved %s -> %s for %s (remaining %s)",
        int(unit.id),
        origin,
        destination,
        cost,
        unit.movement_remaining,
    )

    if unit.side == game.vision_side:
        refresh_visibility(game, rules=rules)

    if unit.movement_remaining > 0:
        moves = reachable_hexes(game, unit)
    else:
        game.cost_cache.clear()
        moves = []
    targets = attackable_targets(game, unit) if not unit.has_acted else []

    if game.selection.unit_id == unit.id:
        if unit.movement_remaining <= 0 and unit.has_acted:
            deselect(game)
        else:
            game.selection.moves = moves
            game.selection.targets = targets

    event: dict[str, object] = {
        "type": "move",
        "unit_id": int(unit.id),
        "from": _coord(origin),
        "to": _coord(destination),
        "cost": cost,
    }
    return ActionResult(True, events=[event])


# ---------------------------------------------------------------------------
# Combat


def can_attack(game: Game, attacker: Unit, defender: Unit) -> bool:
    """Return True if ``attacker`` may attack ``defender`` right now."""

    if not _in_game(game, attacker) or not _in_game(game, defender):
        return False
    if attacker.has_acted or attacker.side == defender.side:
        return False
    return defender.position in attackable_targets(game, attacker)


def attack_unit(
    game: Game,
    attacker: Unit,
    defender: Unit,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Resolve an attack, removing the defender if it is destroyed.

    The selection is cleared afterwards whatever the outcome; an attack ends
    the unit's interactive turn.
    """

    _require_unit(game, attacker)
    _require_unit(game, defender)
    if not can_attack(game, attacker, defender):
        return _failure(f"unit {int(attacker.id)} cannot attack unit {int(defender.id)}")

    result = combat.resolve_attack(attacker, defender)
    if result.destroyed:
        del game.units[defender.id]
    game.bump_generation()
    logger.debug(
        "unit %s hit unit %s for %s (hp %s)",
        int(attacker.id),
        int(defender.id),
        result.damage,
        result.defender_hp,
    )

    if result.destroyed and defender.side == game.vision_side:
        refresh_visibility(game, rules=rules)

    deselect(game)

    event: dict[str, object] = {
        "type": "attack",
        "attacker_id": int(attacker.id),
        "defender_id": int(defender.id),
        "damage": result.damage,
        "defender_hp": result.defender_hp,
        "destroyed": result.destroyed,
    }
    return ActionResult(True, events=[event])


# ---------------------------------------------------------------------------
# Settlements


def can_found_settlement(game: Game, unit: Unit, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Return True if ``unit`` can found a settlement where it stands."""

    if not _in_game(game, unit):
        return False
    if unit.unit_class != rules.units.settler_class or unit.has_acted:
        return False

    tile = game.board.tile_at(unit.position)
    if tile is None or not tile.passable or tile.water:
        return False
    if tile.terrain in rules.structures.unsettleable:
        return False
    return game.structure_at(unit.position) is None


def found_settlement(
    game: Game, unit: Unit, *, rules: RulesConfig = DEFAULT_RULES
) -> ActionResult:
    """Consume a settler and create a settlement on its hex."""

    _require_unit(game, unit)
    if not can_found_settlement(game, unit, rules=rules):
        return _failure(f"unit {int(unit.id)} cannot found a settlement here")

    structure = factory.create_structure(
        game, rules.structures.founded_type, unit.side, unit.position, rules=rules
    )
    del game.units[unit.id]
    game.bump_generation()
    deselect(game)
    refresh_visibility(game, rules=rules)
    logger.info(
        "%s settler %s founded %s %s at %s",
        unit.side,
        int(unit.id),
        structure.structure_type,
        int(structure.id),
        structure.position,
    )

    event: dict[str, object] = {
        "type": "found_settlement",
        "unit_id": int(unit.id),
        "structure_id": int(structure.id),
        "at": _coord(structure.position),
    }
    return ActionResult(True, events=[event])
