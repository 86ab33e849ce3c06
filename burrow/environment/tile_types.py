"""
Tile type registry for the dungeon grid, using the flyweight pattern.

This module defines:
- `TileTypeData`: the intrinsic properties of a *type* of tile (walkable,
  display name and text glyph). These are the flyweight objects.
- An automated registration system. Each registered tile type is assigned a
  unique integer ID and a module constant (`TILE_TYPE_ID_WALL` etc.). The grid
  layers store NumPy arrays of these IDs rather than full records.
- Vectorized helpers that turn a map of IDs into a map of one property.

ID 0 is `VOID`: the "no tile here" value of every grid layer.
"""

import numpy as np

TileTypeData = np.dtype(
    [
        ("walkable", bool),
        ("display_name", "U32"),
        ("glyph", np.int32),  # Character code used by text rendering
    ]
)

# Index in this list is the tile type's ID.
_registered_tile_type_data_list: list[np.ndarray] = []

_tile_type_name_to_id_map: dict[str, int] = {}


def register_tile_type(name: str, tile_type_data_instance: np.ndarray) -> int:
    """
    Registers a new tile type, assigns it a unique ID, and stores it.
    It also creates a module constant for the ID named TILE_TYPE_ID_{NAME}.

    Args:
        name: Unique symbolic name (e.g., "WALL"). Case-insensitive.
        tile_type_data_instance: A record with the TileTypeData dtype.

    Returns:
        The assigned tile type ID.

    Raises:
        ValueError: If the name (case-insensitive) is already registered.
    """
    normalized_name = name.upper()
    if normalized_name in _tile_type_name_to_id_map:
        raise ValueError(
            f"Tile type name '{name}' (as '{normalized_name}') is already registered."
        )

    tile_type_id = len(_registered_tile_type_data_list)
    _registered_tile_type_data_list.append(tile_type_data_instance)
    _tile_type_name_to_id_map[normalized_name] = tile_type_id

    globals()[f"TILE_TYPE_ID_{normalized_name}"] = tile_type_id

    return tile_type_id


def make_tile_type_data(
    *,
    walkable: bool,
    display_name: str,
    glyph: str,
) -> np.ndarray:
    """Build a TileTypeData record."""
    return np.array((walkable, display_name, ord(glyph)), dtype=TileTypeData)


# --- Core Tile Types ---
# VOID must be registered first: ID 0 is the fill value of empty layers.

TILE_TYPE_ID_VOID = register_tile_type(
    "VOID",
    make_tile_type_data(walkable=False, display_name="Void", glyph=" "),
)
TILE_TYPE_ID_FLOOR = register_tile_type(
    "FLOOR",
    make_tile_type_data(walkable=True, display_name="Floor", glyph="."),
)
TILE_TYPE_ID_WALL = register_tile_type(
    "WALL",
    make_tile_type_data(walkable=False, display_name="Wall", glyph="#"),
)
TILE_TYPE_ID_DOWN_STAIRS = register_tile_type(
    "DOWN_STAIRS",
    make_tile_type_data(walkable=True, display_name="Down Stairs", glyph=">"),
)
TILE_TYPE_ID_UP_STAIRS = register_tile_type(
    "UP_STAIRS",
    make_tile_type_data(walkable=True, display_name="Up Stairs", glyph="<"),
)


# --- Pre-calculated Property Arrays ---
# Built after registration so they cover every tile type above.

_tile_type_properties_walkable = np.array(
    [t["walkable"] for t in _registered_tile_type_data_list], dtype=bool
)
_tile_type_properties_glyph = np.array(
    [t["glyph"] for t in _registered_tile_type_data_list], dtype=np.int32
)
_tile_type_properties_display_name = np.array(
    [t["display_name"] for t in _registered_tile_type_data_list], dtype="U32"
)


def get_walkable_map(tile_type_ids_map: np.ndarray) -> np.ndarray:
    """Boolean map of walkability for a map of TileTypeIDs."""
    return _tile_type_properties_walkable[tile_type_ids_map]


def get_glyph_map(tile_type_ids_map: np.ndarray) -> np.ndarray:
    """Map of character codes for a map of TileTypeIDs."""
    return _tile_type_properties_glyph[tile_type_ids_map]


def get_tile_type_name_by_id(tile_type_id: int) -> str:
    """
    Get the human-readable name of a tile type by its ID.

    Returns:
        The display name (e.g., "Wall", "Floor"), or a placeholder for unknown
        IDs.
    """
    if 0 <= tile_type_id < len(_tile_type_properties_display_name):
        return str(_tile_type_properties_display_name[tile_type_id])
    return f"Unknown Tile (ID: {tile_type_id})"
