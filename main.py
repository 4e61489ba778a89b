"""Development entrypoint: run a headless hex-tactics skirmish."""

from __future__ import annotations

import argparse
import asyncio
import logging

from hextactics.config import Settings, get_settings
from hextactics.domain.ai import NO_PACING, take_pursuit_turn
from hextactics.domain.enums import GameOutcome, Side
from hextactics.domain.models import Game
from hextactics.domain.rules_config import RulesConfig
from hextactics.runtime import GameSession, pacing_from_settings

logger = logging.getLogger("hextactics.main")


async def _friendly_autoplay(game: Game, rules: RulesConfig) -> None:
    for unit in game.units_of(Side.FRIENDLY):
        if unit.id in game.units:
            await take_pursuit_turn(game, unit, pacing=NO_PACING, rules=rules)


async def run_skirmish(
    settings: Settings, *, turns: int, friendly_ai: bool, paced: bool
) -> GameOutcome | None:
    session = GameSession.start(
        settings=settings,
        pacing=pacing_from_settings(settings) if paced else NO_PACING,
    )
    game = session.game
    logger.info(
        "skirmish on a %sx%s board with %s units",
        game.board.cols,
        game.board.rows,
        len(game.units),
    )

    outcome = session.outcome()
    while outcome is None and game.turn_number <= turns:
        if friendly_ai:
            await _friendly_autoplay(game, session.rules)
            outcome = session.outcome()
            if outcome is not None:
                break
        outcome = await session.end_turn()

    if outcome is None:
        logger.info("no result after %s turns", turns)
    else:
        logger.info("result on turn %s: %s", game.turn_number, outcome)
    return outcome


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run a headless hex-tactics skirmish")
    parser.add_argument("--turns", type=int, default=20, help="Maximum number of turns to play")
    parser.add_argument("--cols", type=int, default=settings.board_cols, help="Board width")
    parser.add_argument("--rows", type=int, default=settings.board_rows, help="Board height")
    parser.add_argument(
        "--friendly-ai",
        action="store_true",
        help="Let the pursuit AI play the friendly side too",
    )
    parser.add_argument(
        "--paced",
        action="store_true",
        help="Keep the AI presentation delays",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = settings.model_copy(update={"board_cols": args.cols, "board_rows": args.rows})
    asyncio.run(
        run_skirmish(settings, turns=args.turns, friendly_ai=args.friendly_ai, paced=args.paced)
    )


if __name__ == "__main__":
    main()
