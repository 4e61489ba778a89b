"""Phase orchestration for hex-tactics games.

Phases strictly alternate between the friendly and the hostile side.
Entering the friendly phase restores every friendly unit's action economy;
hostile units are restored one at a time as the pursuit AI activates them.
"""

from __future__ import annotations

import logging

from hextactics.domain.enums import Phase, Side
from hextactics.domain.models import Game

logger = logging.getLogger(__name__)


def _enter_phase(game: Game, phase: Phase) -> None:
    """Switch phase and drop everything derived from the previous selection."""

    game.phase = phase
    game.selection.clear()
    game.cost_cache.clear()
    game.bump_generation()
    logger.info("turn %s: %s phase", game.turn_number, phase)


def reset_side(game: Game, side: Side) -> None:
    """Restore movement and the single action for every unit of ``side``."""

    for unit in game.units_of(side):
        unit.reset_action_economy()


def start_hostile_phase(game: Game) -> None:
    """Hand control to the hostile side."""

    _enter_phase(game, Phase.HOSTILE)


def start_friendly_phase(game: Game) -> None:
    """Return control to the friendly side, opening a new turn."""

    if game.phase == Phase.HOSTILE:
        game.turn_number += 1
    _enter_phase(game, Phase.FRIENDLY)
    reset_side(game, Side.FRIENDLY)


def can_end_turn(game: Game) -> bool:
    """Return True if the friendly side may end its phase now."""

    return game.phase == Phase.FRIENDLY and not game.ai_running
