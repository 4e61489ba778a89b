"""Domain model and rules for hex-tactics.

This package hosts the simulation core. It exposes:

* Dataclasses describing every game entity (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule tables (see :mod:`rules_config`).
* Pure rule functions: reachability, visibility, combat, actions, phases
  and the pursuit AI.

Everything operates on an explicitly passed ``Game`` aggregate, so any
number of games can run side by side.
"""

from . import (
    actions,
    ai,
    board,
    combat,
    enums,
    models,
    pathfinding,
    rules_config,
    turn,
    visibility,
)

__all__ = [
    "actions",
    "ai",
    "board",
    "combat",
    "enums",
    "models",
    "pathfinding",
    "rules_config",
    "turn",
    "visibility",
]
