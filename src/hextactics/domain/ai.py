"""Pursuit AI for the hostile side.

Each hostile unit follows a fixed greedy policy: attack the first target in
range; otherwise walk to the reachable hex closest to the nearest opposing
unit, then attack if something came into range. There is no lookahead and
no coordination between units.

The phase runs as a coroutine. Pacing delays between visible effects only
slow the sequence down for presentation; they never change its outcome.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from hextactics.domain.actions import (
    ActionResult,
    attack_unit,
    attackable_targets,
    move_unit,
    reachable_hexes,
)
from hextactics.domain.enums import Side
from hextactics.domain.models import Game, Unit
from hextactics.domain.pathfinding import closest_reachable
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig
from hextactics.domain.turn import start_friendly_phase, start_hostile_phase
from hextactics.utils.hex_math import hex_distance

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[Game], None]


@dataclass(frozen=True, slots=True)
class AIPacing:
    """Delays, in seconds, between visible AI effects."""

    action_delay: float = 0.6
    followup_delay: float = 0.3


NO_PACING = AIPacing(action_delay=0.0, followup_delay=0.0)


async def _pause(seconds: float) -> None:
    await asyncio.sleep(max(0.0, seconds))


def _notify(game: Game, on_update: UpdateCallback | None) -> None:
    if on_update is not None:
        on_update(game)


def nearest_opponent(game: Game, unit: Unit) -> Unit | None:
    """Return the closest opposing unit by hex distance (first found on ties)."""

    nearest: Unit | None = None
    best = math.inf
    for other in game.units_of(unit.side.opponent):
        distance = hex_distance(unit.position, other.position)
        if distance < best:
            best = distance
            nearest = other
    return nearest


def _attack_first_target(
    game: Game, unit: Unit, on_update: UpdateCallback | None, rules: RulesConfig
) -> ActionResult | None:
    targets = attackable_targets(game, unit)
    if not targets:
        return None
    defender = game.unit_at(targets[0])
    if defender is None:
        return None
    result = attack_unit(game, unit, defender, rules=rules)
    _notify(game, on_update)
    return result


async def take_pursuit_turn(
    game: Game,
    unit: Unit,
    *,
    on_update: UpdateCallback | None = None,
    pacing: AIPacing = AIPacing(),
    rules: RulesConfig = DEFAULT_RULES,
) -> list[ActionResult]:
    """Run the pursuit policy for one unit and return the actions it took."""

    results: list[ActionResult] = []

    if not unit.has_acted:
        attacked = _attack_first_target(game, unit, on_update, rules)
        if attacked is not None:
            results.append(attacked)
            return results

    if unit.movement_remaining <= 0:
        return results

    quarry = nearest_opponent(game, unit)
    if quarry is None:
        return results

    destination = closest_reachable(reachable_hexes(game, unit), quarry.position)
    if destination is None:
        return results

    results.append(move_unit(game, unit, destination, rules=rules))
    _notify(game, on_update)

    if not unit.has_acted and attackable_targets(game, unit):
        await _pause(pacing.followup_delay)
        attacked = _attack_first_target(game, unit, on_update, rules)
        if attacked is not None:
            results.append(attacked)

    return results


async def run_hostile_phase(
    game: Game,
    *,
    on_update: UpdateCallback | None = None,
    pacing: AIPacing = AIPacing(),
    rules: RulesConfig = DEFAULT_RULES,
) -> list[ActionResult]:
    """Play the whole hostile phase and hand control back to the friendly side.

    ``on_update`` is called after every discrete action so the caller can
    redraw and check the outcome. The sequence always runs to completion;
    if a unit's turn raises, control still returns to the friendly side
    before the error propagates.
    """

    start_hostile_phase(game)
    game.ai_running = True
    _notify(game, on_update)

    results: list[ActionResult] = []
    try:
        for unit in game.units_of(Side.HOSTILE):
            if not unit.alive or unit.id not in game.units:
                continue
            unit.reset_action_economy()
            await _pause(pacing.action_delay)
            results.extend(
                await take_pursuit_turn(
                    game, unit, on_update=on_update, pacing=pacing, rules=rules
                )
            )
    finally:
        game.ai_running = False
        start_friendly_phase(game)

    logger.info("hostile phase finished after %s actions", len(results))
    _notify(game, on_update)
    return results
