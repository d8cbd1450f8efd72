"""
Footprint provider for 3D scene objects.

Projects trimesh bounding boxes and 3D positions onto a ground plane to
get the 2D ``(position, extent)`` pairs the grid works with.
"""

import numpy as np
import trimesh
from typing import Any, Sequence, Tuple

from ..core.errors import MissingFootprintError
from ..core.types import Vector2, as_vector2


PLANE_AXES = {
    "xy": (0, 1),
    "xz": (0, 2),
    "yz": (1, 2),
}


def _axes(plane: str) -> Tuple[int, int]:
    if plane not in PLANE_AXES:
        raise ValueError(f"plane must be one of {set(PLANE_AXES)}, got {plane!r}")
    return PLANE_AXES[plane]


def project_to_plane(point: Sequence[float], plane: str = "xz") -> Vector2:
    """
    Drop the axis normal to ``plane`` from a 3D point.

    Parameters
    ----------
    point : array-like of 3 floats
        World position
    plane : {"xy", "xz", "yz"}
        Ground plane. ``"xz"`` suits y-up scenes.
    """
    a, b = _axes(plane)
    p = np.asarray(point, dtype=float)
    if p.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {p.shape}")
    return Vector2(float(p[a]), float(p[b]))


def footprint_from_bounds(bounds: np.ndarray, plane: str = "xz") -> Tuple[Vector2, Vector2]:
    """
    Convert an axis-aligned 3D box to a 2D center and extent.

    Parameters
    ----------
    bounds : array of shape (2, 3)
        ``[min_corner, max_corner]``, as ``trimesh.Trimesh.bounds``
    plane : {"xy", "xz", "yz"}
        Ground plane

    Returns
    -------
    center : Vector2
        Center of the projected box
    extent : Vector2
        Width and height of the projected box
    """
    a, b = _axes(plane)
    bounds = np.asarray(bounds, dtype=float)
    if bounds.shape != (2, 3):
        raise ValueError(f"Expected bounds of shape (2, 3), got {bounds.shape}")

    lo = bounds[0, [a, b]]
    hi = bounds[1, [a, b]]
    center = (lo + hi) / 2
    size = hi - lo
    return Vector2.from_array(center), Vector2.from_array(size)


def footprint_from_mesh(mesh: trimesh.Trimesh, plane: str = "xz") -> Tuple[Vector2, Vector2]:
    """
    2D footprint of a mesh's axis-aligned bounding box.

    Returns
    -------
    center, extent : Vector2
        In the mesh's own coordinates
    """
    if not isinstance(mesh, trimesh.Trimesh):
        raise TypeError(f"Expected Trimesh object, got {type(mesh)}")
    if len(mesh.vertices) == 0:
        raise ValueError("Mesh has no vertices; cannot compute a footprint")
    return footprint_from_bounds(mesh.bounds, plane)


def footprint_from_object(obj: Any, plane: str = "xz") -> Vector2:
    """
    Extent of a scene object on the ground plane.

    Uses ``obj.extent`` when the object carries one, otherwise the
    bounding box of ``obj.mesh``. The object's ``position`` supplies the
    center, so only the extent is returned.

    Raises
    ------
    MissingFootprintError
        If the object has neither an extent nor a mesh
    """
    extent = getattr(obj, "extent", None)
    if extent is not None:
        return as_vector2(extent)

    mesh = getattr(obj, "mesh", None)
    if mesh is None:
        raise MissingFootprintError(
            f"{type(obj).__name__} has no 'extent' or 'mesh' to derive a footprint from"
        )

    _, extent = footprint_from_mesh(mesh, plane)
    return extent
