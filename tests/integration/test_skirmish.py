"""End-to-end skirmishes driven through the game session."""

from __future__ import annotations

import pytest

from hextactics.config import Settings
from hextactics.domain import actions
from hextactics.domain.ai import NO_PACING, take_pursuit_turn
from hextactics.domain.board import board_from_rows
from hextactics.domain.enums import GameOutcome, Phase, Side, UnitClass
from hextactics.domain.models import Game
from hextactics.factory import create_unit, new_game
from hextactics.runtime import GameSession
from hextactics.utils.hex_math import HexCoord


def _assert_consistent(game: Game) -> None:
    positions = [unit.position for unit in game.units.values()]
    assert len(positions) == len(set(positions))
    for unit in game.units.values():
        assert unit.alive
        assert unit.movement_remaining >= 0
        assert game.board.in_bounds(unit.position)
        tile = game.board.tile_at(unit.position)
        assert tile.water == unit.naval
    for tile in game.board:
        if tile.visible:
            assert tile.explored


@pytest.mark.asyncio
async def test_autoplayed_skirmish_stays_consistent():
    settings = Settings(_env_file=None, board_cols=24, board_rows=20)
    session = GameSession.start(settings=settings, pacing=NO_PACING, on_update=_assert_consistent)
    game = session.game

    outcome = session.outcome()
    while outcome is None and game.turn_number <= 40:
        for unit in game.units_of(Side.FRIENDLY):
            if unit.id in game.units:
                await take_pursuit_turn(game, unit, pacing=NO_PACING)
                _assert_consistent(game)
        outcome = session.outcome()
        if outcome is not None:
            break
        outcome = await session.end_turn()
        assert game.phase == Phase.FRIENDLY
        assert not game.ai_running

    _assert_consistent(game)
    if outcome is not None:
        assert outcome in (GameOutcome.VICTORY, GameOutcome.DEFEAT)


@pytest.mark.asyncio
async def test_hostile_pursuit_wears_down_a_lone_settler():
    game = new_game(board_from_rows(["." * 10 for _ in range(8)]))
    settler = create_unit(game, UnitClass.SETTLER, Side.FRIENDLY, HexCoord(col=1, row=1))
    create_unit(game, UnitClass.WARRIOR, Side.HOSTILE, HexCoord(col=8, row=6))
    outcomes = []
    session = GameSession(
        game, settings=Settings(_env_file=None), pacing=NO_PACING, on_outcome=outcomes.append
    )

    outcome = None
    for _ in range(6):
        outcome = await session.end_turn()
        if outcome is not None:
            break

    assert outcome == GameOutcome.DEFEAT
    assert outcomes == [GameOutcome.DEFEAT]
    assert settler.id not in game.units


@pytest.mark.asyncio
async def test_naval_and_land_units_keep_to_their_terrain():
    rows = ["....~~~~~~", "....~~~~~~", "....~~~~~~", "....~~~~~~", "....~~~~~~"]
    game = new_game(board_from_rows(rows))
    create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=1, row=2))
    galley = create_unit(game, UnitClass.GALLEY, Side.HOSTILE, HexCoord(col=9, row=2))
    session = GameSession(game, settings=Settings(_env_file=None), pacing=NO_PACING)

    for _ in range(3):
        await session.end_turn()
        _assert_consistent(game)

    assert game.board.tile_at(galley.position).water
    assert galley.position.col >= 4


def test_friendly_turn_through_session_clicks():
    game = new_game(board_from_rows(["." * 12 for _ in range(10)]))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=3, row=4))
    spearman = create_unit(game, UnitClass.SPEARMAN, Side.HOSTILE, HexCoord(col=6, row=4))
    session = GameSession(game, settings=Settings(_env_file=None), pacing=NO_PACING)

    session.handle_click(warrior.position)
    assert HexCoord(col=5, row=4) in game.selection.moves
    session.handle_click(HexCoord(col=5, row=4))
    assert game.selection.targets == [spearman.position]
    session.handle_click(spearman.position)

    assert spearman.hp == 6
    assert warrior.movement_remaining == 0
    assert warrior.has_acted
    assert not actions.can_attack(game, warrior, spearman)
    assert session.snapshot().units[1].hp == 6
