"""Runtime primitives driving a hex-tactics game from outside.

``GameSession`` is the seam between the simulation and its surroundings:
input translated to grid coordinates comes in through ``handle_click``, the
end-turn trigger through ``end_turn``, and renderers read ``snapshot``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from hextactics.config import Settings, get_settings
from hextactics.domain import actions
from hextactics.domain.actions import ActionResult
from hextactics.domain.ai import AIPacing, run_hostile_phase
from hextactics.domain.board import empty_board
from hextactics.domain.enums import GameOutcome, Phase, Side
from hextactics.domain.models import Game
from hextactics.domain.rules_config import DEFAULT_RULES, RulesConfig, VisibilityRules
from hextactics.factory import new_game, spawn_starting_rosters
from hextactics.schemas import GameSnapshot
from hextactics.utils.hex_math import HexCoord, to_hex

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[GameOutcome], None]
UpdateCallback = Callable[[Game], None]


class GameBusyError(RuntimeError):
    """Raised when the end-turn trigger fires outside the friendly phase."""


def rules_from_settings(settings: Settings, base: RulesConfig = DEFAULT_RULES) -> RulesConfig:
    """Return ``base`` with the tunables exposed through settings applied."""

    return RulesConfig(
        terrain=base.terrain,
        units=base.units,
        structures=base.structures,
        visibility=VisibilityRules(structure_sight_range=settings.structure_sight_range),
    )


def pacing_from_settings(settings: Settings) -> AIPacing:
    return AIPacing(
        action_delay=settings.ai_action_delay_seconds,
        followup_delay=settings.ai_followup_delay_seconds,
    )


class GameSession:
    """Interactive wrapper around one game."""

    def __init__(
        self,
        game: Game,
        *,
        settings: Settings | None = None,
        rules: RulesConfig | None = None,
        pacing: AIPacing | None = None,
        on_update: UpdateCallback | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.game = game
        self.rules = rules or rules_from_settings(self.settings)
        self.pacing = pacing or pacing_from_settings(self.settings)
        self._on_update = on_update
        self._on_outcome = on_outcome
        self._reported: GameOutcome | None = None
        self._turn_lock = asyncio.Lock()

    @classmethod
    def start(
        cls,
        *,
        settings: Settings | None = None,
        pacing: AIPacing | None = None,
        on_update: UpdateCallback | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> GameSession:
        """Create a session on a uniform board with the starting rosters placed."""

        settings = settings or get_settings()
        board = empty_board(settings.board_cols, settings.board_rows)
        game = new_game(board, vision_side=settings.vision_side)
        session = cls(
            game,
            settings=settings,
            pacing=pacing,
            on_update=on_update,
            on_outcome=on_outcome,
        )
        spawn_starting_rosters(game, rules=session.rules)
        return session

    # ------------------------------------------------------------------
    # Queries

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.from_game(self.game)

    def outcome(self) -> GameOutcome | None:
        return actions.check_outcome(self.game, Side.FRIENDLY)

    @property
    def accepts_input(self) -> bool:
        return self.game.phase == Phase.FRIENDLY and not self.game.ai_running

    # ------------------------------------------------------------------
    # Input

    def handle_click(self, coord: HexCoord) -> ActionResult | None:
        """Apply a click on ``coord`` during the friendly phase.

        Clicking a friendly unit selects it. With a unit selected, clicking a
        hex from its move set moves there and clicking one from its target set
        attacks; any other click deselects. Returns None when the click is
        ignored or only clears the selection.
        """

        if not self.accepts_input:
            return None

        game = self.game
        clicked = game.unit_at(coord)
        if clicked is not None and clicked.side == Side.FRIENDLY:
            return self._after(actions.select_unit(game, clicked))

        selected = game.selected_unit
        if selected is None:
            return None

        if coord in game.selection.moves:
            return self._after(actions.move_unit(game, selected, coord, rules=self.rules))

        if coord in game.selection.targets and clicked is not None:
            return self._after(actions.attack_unit(game, selected, clicked, rules=self.rules))

        actions.deselect(game)
        self._notify()
        return None

    def click_pixel(self, x: float, y: float) -> ActionResult | None:
        """Translate a world-space pixel position to a hex and click it."""

        coord = to_hex(x, y, self.settings.hex_size)
        if not self.game.board.in_bounds(coord):
            return None
        return self.handle_click(coord)

    def found_settlement(self) -> ActionResult | None:
        """Found a settlement with the selected unit, if it is allowed to."""

        selected = self.game.selected_unit
        if not self.accepts_input or selected is None:
            return None
        if not actions.can_found_settlement(self.game, selected, rules=self.rules):
            return None
        return self._after(actions.found_settlement(self.game, selected, rules=self.rules))

    # ------------------------------------------------------------------
    # Turn control

    async def end_turn(self) -> GameOutcome | None:
        """Run the hostile phase to completion and return the outcome, if any.

        Raises:
            GameBusyError: If called outside the friendly phase
        """

        if not self.accepts_input or self._turn_lock.locked():
            raise GameBusyError("the friendly phase is not active")

        async with self._turn_lock:
            await run_hostile_phase(
                self.game, on_update=self._after_ai_action, pacing=self.pacing, rules=self.rules
            )
        return self._check_outcome()

    # ------------------------------------------------------------------
    # Helpers

    def _after(self, result: ActionResult) -> ActionResult:
        self._notify()
        if result.success:
            self._check_outcome()
        return result

    def _after_ai_action(self, game: Game) -> None:
        if self._on_update is not None:
            self._on_update(game)
        self._check_outcome()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self.game)

    def _check_outcome(self) -> GameOutcome | None:
        outcome = self.outcome()
        if outcome is not None and outcome != self._reported:
            self._reported = outcome
            logger.info("game decided: %s", outcome)
            if self._on_outcome is not None:
                self._on_outcome(outcome)
        return outcome
