"""Reachability and movement-cost calculation for unit movement.

This module implements a Dijkstra frontier expansion over the hex grid,
handling per-tile movement costs, occupied hexes and the land/water
restriction. The costs of the most recent search are kept in a
``MovementCostCache`` so a move can be charged exactly what the search paid.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from heapq import heappop, heappush
from typing import TYPE_CHECKING

from hextactics.utils.hex_math import HexCoord, hex_distance, hex_neighbors

if TYPE_CHECKING:
    from hextactics.domain.models import Board, Tile, Unit

logger = logging.getLogger(__name__)

FALLBACK_MOVEMENT_COST = 1


class StaleMovementCostError(RuntimeError):
    """Raised when a cost lookup does not match the cached search."""


@dataclass(slots=True)
class MovementCostCache:
    """Costs from the most recent reachability search.

    Attributes:
        unit_id: Unit the search was run for
        generation: Game generation at the time of the search
        costs: Cost to reach each hex, or None when nothing is cached
    """

    unit_id: int | None = None
    generation: int | None = None
    costs: dict[HexCoord, float] | None = None

    def store(self, unit_id: int, generation: int, costs: dict[HexCoord, float]) -> None:
        self.unit_id = unit_id
        self.generation = generation
        self.costs = dict(costs)

    def clear(self) -> None:
        self.unit_id = None
        self.generation = None
        self.costs = None

    def is_fresh_for(self, unit_id: int, generation: int) -> bool:
        return (
            self.costs is not None and self.unit_id == unit_id and self.generation == generation
        )

    def cost_to(
        self,
        coord: HexCoord,
        *,
        unit_id: int | None = None,
        generation: int | None = None,
    ) -> float:
        """Return the cached cost to reach ``coord``.

        With nothing cached the cost is assumed to be 1, since a hex may be
        queried before any search ran. Naming a unit or generation other than
        the cached one raises ``StaleMovementCostError``.
        """

        if self.costs is None:
            logger.debug("no cached search, assuming cost %s for %s", FALLBACK_MOVEMENT_COST, coord)
            return FALLBACK_MOVEMENT_COST

        if unit_id is not None and unit_id != self.unit_id:
            msg = f"cached costs belong to unit {self.unit_id}, not unit {unit_id}"
            logger.warning(msg)
            raise StaleMovementCostError(msg)
        if generation is not None and generation != self.generation:
            msg = f"cached costs are from generation {self.generation}, game is at {generation}"
            logger.warning(msg)
            raise StaleMovementCostError(msg)

        return self.costs.get(coord, FALLBACK_MOVEMENT_COST)


@dataclass(slots=True)
class ReachableArea:
    """Result of a reachability search.

    ``costs`` includes the origin at cost 0 and keeps first-discovery order.
    """

    origin: HexCoord
    costs: dict[HexCoord, float]

    @property
    def hexes(self) -> list[HexCoord]:
        return [coord for coord in self.costs if coord != self.origin]

    def __contains__(self, coord: object) -> bool:
        return coord != self.origin and coord in self.costs

    def __len__(self) -> int:
        return len(self.costs) - 1


def is_passable_for(tile: Tile | None, naval: bool) -> bool:
    """Return True if a unit of the given domain may enter ``tile``.

    Naval units only move on water; land units never enter it.
    """

    if tile is None:
        return False
    if math.isinf(tile.movement_cost):
        return False
    return tile.water == naval


def find_reachable(
    unit: Unit,
    board: Board,
    is_occupied: Callable[[HexCoord], bool],
    in_bounds: Callable[[HexCoord], bool] | None = None,
) -> ReachableArea:
    """Find every hex the unit can reach with its remaining movement.

    A neighbor is entered only if it is in bounds, holds no unit and is
    passable for the unit's domain. It is admitted when the accumulated cost
    fits in the remaining movement and improves on any earlier cost.

    Args:
        unit: Unit to search for (position, movement_remaining, naval)
        board: Terrain grid supplying movement costs
        is_occupied: Returns True if a unit stands on a hex
        in_bounds: Bounds query (defaults to ``board.in_bounds``)

    Returns:
        ReachableArea with the minimum cost to each reachable hex
    """
    in_bounds = in_bounds or board.in_bounds
    budget = unit.movement_remaining
    start = unit.position

    counter = itertools.count()
    # Priority queue: (cost, discovery sequence, hex)
    pq: list[tuple[float, int, HexCoord]] = [(0, next(counter), start)]
    reached: dict[HexCoord, float] = {start: 0}

    while pq:
        cost, _, current = heappop(pq)

        if cost > reached[current]:
            continue
        if cost >= budget:
            continue

        for neighbor in hex_neighbors(current):
            if not in_bounds(neighbor):
                continue
            if is_occupied(neighbor):
                continue

            tile = board.tile_at(neighbor)
            if not is_passable_for(tile, unit.naval):
                continue

            new_cost = cost + tile.movement_cost
            if new_cost > budget:
                continue

            if neighbor not in reached or new_cost < reached[neighbor]:
                reached[neighbor] = new_cost
                heappush(pq, (new_cost, next(counter), neighbor))

    return ReachableArea(origin=start, costs=reached)


def closest_reachable(reachable: Iterable[HexCoord], target: HexCoord) -> HexCoord | None:
    """Return the reachable hex closest to ``target``.

    Ties go to the hex found first. Returns None if nothing is reachable.
    """

    best: HexCoord | None = None
    best_distance = math.inf

    for coord in reachable:
        distance = hex_distance(coord, target)
        if distance < best_distance:
            best_distance = distance
            best = coord
    return best
