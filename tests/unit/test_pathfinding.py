"""Tests for reachability search and the movement-cost cache."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hextactics.domain.board import board_from_rows, empty_board
from hextactics.domain.enums import Side, UnitClass
from hextactics.domain.pathfinding import (
    FALLBACK_MOVEMENT_COST,
    MovementCostCache,
    StaleMovementCostError,
    closest_reachable,
    find_reachable,
    is_passable_for,
)
from hextactics.factory import create_unit, new_game
from hextactics.utils.hex_math import HexCoord, hex_distance, hexes_in_range


def _search(game, unit):
    return find_reachable(unit, game.board, game.is_occupied)


def test_interior_unit_reaches_two_step_neighbourhood():
    game = new_game(empty_board(12, 12))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=5, row=5))

    area = _search(game, warrior)

    assert len(area) == 18
    assert warrior.position not in area
    assert set(area.hexes) == set(hexes_in_range(warrior.position, 2)) - {warrior.position}


def test_costs_match_distance_on_uniform_terrain():
    game = new_game(empty_board(12, 12))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=5, row=5))

    area = _search(game, warrior)

    assert area.costs[warrior.position] == 0
    for coord in area.hexes:
        assert area.costs[coord] == hex_distance(warrior.position, coord)


def test_occupied_hexes_block_entry_and_passage():
    game = new_game(empty_board(12, 12))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=5, row=5))
    create_unit(game, UnitClass.SPEARMAN, Side.HOSTILE, HexCoord(col=6, row=5))

    area = _search(game, warrior)

    assert HexCoord(col=6, row=5) not in area
    # only reachable through the blocked hex
    assert HexCoord(col=7, row=5) not in area
    assert len(area) == 16


def test_zero_movement_reaches_nothing():
    game = new_game(empty_board(12, 12))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=5, row=5))
    warrior.movement_remaining = 0

    area = _search(game, warrior)

    assert len(area) == 0
    assert area.hexes == []


def test_forest_costs_two():
    game = new_game(board_from_rows(["fffff"] * 5))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=2, row=2))

    area = _search(game, warrior)

    assert len(area) == 6
    assert all(area.costs[coord] == 2 for coord in area.hexes)


def test_mountain_exceeding_budget_is_unreachable():
    game = new_game(board_from_rows(["mmmmm"] * 5))
    warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=2, row=2))

    assert len(_search(game, warrior)) == 0


def test_sand_costs_two_to_enter():
    rows = [".........", ".........", "........."]
    rows[1] = "....s...."
    game = new_game(board_from_rows(rows))
    scout = create_unit(game, UnitClass.SCOUT, Side.FRIENDLY, HexCoord(col=3, row=1))

    area = _search(game, scout)

    assert area.costs[HexCoord(col=4, row=1)] == 2
    assert area.costs[HexCoord(col=5, row=1)] == 3


def test_impassable_tiles_are_never_entered():
    board = empty_board(12, 12)
    board.tile_at(HexCoord(col=6, row=5)).movement_cost = math.inf
    game = new_game(board)
    horseman = create_unit(game, UnitClass.HORSEMAN, Side.FRIENDLY, HexCoord(col=5, row=5))

    area = _search(game, horseman)

    assert HexCoord(col=6, row=5) not in area
    assert HexCoord(col=7, row=5) in area


class TestWaterRestriction:
    """Land units stay on land and naval units stay on water."""

    def _game(self):
        return new_game(board_from_rows(["..~~~~", "..~~~~", "..~~~~", "..~~~~"]))

    def test_land_unit_never_enters_water(self):
        game = self._game()
        warrior = create_unit(game, UnitClass.WARRIOR, Side.FRIENDLY, HexCoord(col=1, row=1))

        area = _search(game, warrior)

        assert area.hexes
        assert all(not game.board.tile_at(coord).water for coord in area.hexes)

    def test_naval_unit_stays_on_water(self):
        game = self._game()
        galley = create_unit(game, UnitClass.GALLEY, Side.FRIENDLY, HexCoord(col=3, row=1))

        area = _search(game, galley)

        assert area.hexes
        assert all(game.board.tile_at(coord).water for coord in area.hexes)

    def test_is_passable_for(self):
        game = self._game()
        water = game.board.tile_at(HexCoord(col=3, row=0))
        plains = game.board.tile_at(HexCoord(col=0, row=0))

        assert is_passable_for(plains, naval=False)
        assert not is_passable_for(plains, naval=True)
        assert is_passable_for(water, naval=True)
        assert not is_passable_for(water, naval=False)
        assert not is_passable_for(None, naval=False)


def test_edge_of_board_is_respected():
    game = new_game(empty_board(4, 4))
    scout = create_unit(game, UnitClass.SCOUT, Side.FRIENDLY, HexCoord(col=0, row=0))

    area = _search(game, scout)

    assert all(game.board.in_bounds(coord) for coord in area.hexes)
    assert len(area) == 14


@given(
    col=st.integers(min_value=4, max_value=10),
    row=st.integers(min_value=4, max_value=10),
    movement=st.integers(min_value=0, max_value=4),
)
def test_uniform_terrain_reaches_exactly_the_distance_disc(col, row, movement):
    game = new_game(empty_board(15, 15))
    unit = create_unit(game, UnitClass.SCOUT, Side.FRIENDLY, HexCoord(col=col, row=row))
    unit.movement_remaining = movement

    area = _search(game, unit)

    expected = {
        coord
        for coord in hexes_in_range(unit.position, movement)
        if game.board.in_bounds(coord) and coord != unit.position
    }
    assert set(area.hexes) == expected
    assert len(area.hexes) == len(set(area.hexes))


class TestMovementCostCache:
    """Tests for the cost cache keyed by unit and generation."""

    def test_empty_cache_falls_back_to_one(self):
        cache = MovementCostCache()
        assert cache.cost_to(HexCoord(col=1, row=1)) == FALLBACK_MOVEMENT_COST == 1

    def test_cached_cost_returned(self):
        cache = MovementCostCache()
        cache.store(1, 0, {HexCoord(col=2, row=2): 2})

        assert cache.cost_to(HexCoord(col=2, row=2), unit_id=1, generation=0) == 2
        assert cache.is_fresh_for(1, 0)

    def test_unsearched_hex_falls_back_to_one(self):
        cache = MovementCostCache()
        cache.store(1, 0, {HexCoord(col=2, row=2): 2})

        assert cache.cost_to(HexCoord(col=9, row=9)) == 1

    def test_other_unit_is_stale(self):
        cache = MovementCostCache()
        cache.store(1, 0, {HexCoord(col=2, row=2): 2})

        assert not cache.is_fresh_for(2, 0)
        with pytest.raises(StaleMovementCostError):
            cache.cost_to(HexCoord(col=2, row=2), unit_id=2)

    def test_old_generation_is_stale(self):
        cache = MovementCostCache()
        cache.store(1, 0, {HexCoord(col=2, row=2): 2})

        with pytest.raises(StaleMovementCostError, match="generation"):
            cache.cost_to(HexCoord(col=2, row=2), unit_id=1, generation=1)

    def test_clear(self):
        cache = MovementCostCache()
        cache.store(1, 0, {HexCoord(col=2, row=2): 2})
        cache.clear()

        assert cache.costs is None
        assert not cache.is_fresh_for(1, 0)

    def test_store_copies_costs(self):
        costs = {HexCoord(col=2, row=2): 2}
        cache = MovementCostCache()
        cache.store(1, 0, costs)
        costs[HexCoord(col=2, row=2)] = 5

        assert cache.cost_to(HexCoord(col=2, row=2)) == 2


class TestClosestReachable:
    def test_empty_is_none(self):
        assert closest_reachable([], HexCoord(col=0, row=0)) is None

    def test_picks_closest(self):
        target = HexCoord(col=5, row=5)
        reachable = [HexCoord(col=9, row=5), HexCoord(col=7, row=5), HexCoord(col=8, row=5)]
        assert closest_reachable(reachable, target) == HexCoord(col=7, row=5)

    def test_ties_go_to_first_found(self):
        target = HexCoord(col=5, row=5)
        reachable = [HexCoord(col=5, row=4), HexCoord(col=6, row=5)]
        assert closest_reachable(reachable, target) == HexCoord(col=5, row=4)
        assert closest_reachable(list(reversed(reachable)), target) == HexCoord(col=6, row=5)

    def test_equidistant_candidates_resolve_by_search_order(self):
        game = new_game(empty_board(12, 12))
        warrior = create_unit(game, UnitClass.WARRIOR, Side.HOSTILE, HexCoord(col=5, row=5))
        target = HexCoord(col=5, row=1)
        tied = [HexCoord(col=6, row=3), HexCoord(col=5, row=3), HexCoord(col=4, row=3)]

        hexes = _search(game, warrior).hexes

        assert [hex_distance(coord, target) for coord in tied] == [2, 2, 2]
        assert min(hex_distance(coord, target) for coord in hexes) == 2
        order = [hexes.index(coord) for coord in tied]
        assert order == sorted(order)
        assert closest_reachable(hexes, target) == HexCoord(col=6, row=3)
