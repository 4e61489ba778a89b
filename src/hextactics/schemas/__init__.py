from .state import (
    CoordRead,
    GameSnapshot,
    SelectionRead,
    StructureRead,
    TileRead,
    UnitRead,
    to_snapshot_dict,
)

__all__ = [
    "CoordRead",
    "GameSnapshot",
    "SelectionRead",
    "StructureRead",
    "TileRead",
    "UnitRead",
    "to_snapshot_dict",
]
