"""
Adapters connecting the grid to trimesh scenes and networkx graphs.
"""

from .mesh_adapter import (
    project_to_plane,
    footprint_from_bounds,
    footprint_from_mesh,
    footprint_from_object,
    PLANE_AXES,
)
from .networkx_adapter import to_proximity_graph, candidate_pairs

__all__ = [
    "project_to_plane",
    "footprint_from_bounds",
    "footprint_from_mesh",
    "footprint_from_object",
    "PLANE_AXES",
    "to_proximity_graph",
    "candidate_pairs",
]
