"""Utility functions for the hex-tactics simulation."""

from hextactics.utils.hex_math import (
    HexCoord,
    hex_distance,
    hex_neighbors,
    hexes_in_range,
    to_hex,
    to_pixel,
)

__all__ = [
    "HexCoord",
    "hex_distance",
    "hex_neighbors",
    "hexes_in_range",
    "to_hex",
    "to_pixel",
]
