"""
Per-frame tracking of 3D scene objects in a 2D grid.

An ``ObjectTracker`` owns one client per scene object. Objects expose a 3D
``position`` and either an ``extent`` or a trimesh ``mesh``; the tracker
projects them onto a ground plane and keeps the grid in sync once per
frame via ``update_all``.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.client import Client
from ..core.errors import HashGridError, InvalidStateError
from ..core.grid import SpatialHashGrid
from ..core.result import ErrorCode, OperationResult
from ..core.types import Vector2, VectorLike
from ..adapters.mesh_adapter import PLANE_AXES, footprint_from_object, project_to_plane

logger = logging.getLogger(__name__)

FootprintProvider = Callable[[Any, str], Vector2]


class ObjectTracker:
    """
    Keeps scene objects filed in a ``SpatialHashGrid``.

    Each client's payload is ``{"object": obj}``.
    """

    def __init__(
        self,
        grid: SpatialHashGrid,
        plane: str = "xz",
        footprint_provider: Optional[FootprintProvider] = None,
    ):
        """
        Initialize tracker.

        Parameters
        ----------
        grid : SpatialHashGrid
            Grid to file objects into
        plane : {"xy", "xz", "yz"}
            Ground plane the 3D positions are projected onto
        footprint_provider : callable, optional
            ``(obj, plane) -> extent``. Defaults to
            ``footprint_from_object`` (explicit extent or mesh bounds).
        """
        if plane not in PLANE_AXES:
            raise ValueError(f"plane must be one of {set(PLANE_AXES)}, got {plane!r}")
        self.grid = grid
        self.plane = plane
        self.footprint_provider = footprint_provider or footprint_from_object
        self._clients: Dict[int, Client] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._clients

    @property
    def clients(self) -> List[Client]:
        """Tracked clients in insertion order."""
        return list(self._clients.values())

    def client_for(self, obj: Any) -> Client:
        """Client of a tracked object."""
        try:
            return self._clients[id(obj)]
        except KeyError:
            raise InvalidStateError(
                f"{type(obj).__name__} is not tracked", ErrorCode.OBJECT_NOT_TRACKED
            ) from None

    def add(self, obj: Any) -> Client:
        """
        Start tracking a scene object.

        Raises
        ------
        InvalidStateError
            If the object is already tracked
        MissingFootprintError
            If no footprint can be derived for it
        """
        if id(obj) in self._clients:
            raise InvalidStateError(
                f"{type(obj).__name__} is already tracked", ErrorCode.OBJECT_ALREADY_TRACKED
            )

        position = project_to_plane(obj.position, self.plane)
        extent = self.footprint_provider(obj, self.plane)
        client = self.grid.insert(position, extent, {"object": obj})
        self._clients[id(obj)] = client
        return client

    def remove(self, obj: Any) -> None:
        """Stop tracking an object and take it out of the grid."""
        client = self.client_for(obj)
        self.grid.remove(client)
        del self._clients[id(obj)]

    def update_all(self, refresh_extent: bool = False) -> OperationResult:
        """
        Re-read every object's position and update the grid.

        Parameters
        ----------
        refresh_extent : bool
            Also ask the footprint provider for a new extent

        Returns
        -------
        result : OperationResult
            ``metadata`` holds ``updated``, ``relocated`` and ``failed``
            counts. Objects that fail are left at their previous cells.
        """
        errors = []
        error_codes = []
        updated = 0
        relocated = 0

        for client in self._clients.values():
            obj = client.payload["object"]
            old_position, old_extent = client.position, client.extent
            try:
                client.move_to(project_to_plane(obj.position, self.plane))
                if refresh_extent:
                    client.resize(self.footprint_provider(obj, self.plane))
                if self.grid.update(client):
                    relocated += 1
                updated += 1
            except (HashGridError, ValueError) as e:
                client.position, client.extent = old_position, old_extent
                code = e.code if isinstance(e, HashGridError) else ErrorCode.INVALID_PARAMETER
                errors.append(f"Client {client.id}: {e}")
                error_codes.append(code.value)
                logger.warning("Skipping update of client %d: %s", client.id, e)

        metadata = {"updated": updated, "relocated": relocated, "failed": len(errors)}
        if not errors:
            return OperationResult.success(
                f"Updated {updated} clients ({relocated} relocated)", metadata=metadata
            )

        factory = OperationResult.partial_success if updated else OperationResult.failure
        return factory(
            f"Updated {updated} of {len(self._clients)} clients",
            errors=errors,
            error_codes=error_codes,
            metadata=metadata,
        )

    def get_nearby_objects(self, position: Sequence[float], extent: VectorLike) -> List[Any]:
        """
        Objects whose cells intersect a query box.

        Parameters
        ----------
        position : array-like of 3 floats
            World position of the query center
        extent : (width, height)
            Query size on the ground plane

        Returns
        -------
        objects : list
            Scene objects, not clients
        """
        center = project_to_plane(position, self.plane)
        return [client.payload["object"] for client in self.grid.query(center, extent)]

    def dispose(self) -> OperationResult:
        """
        Remove every tracked object from the grid and forget it.

        Clients already taken out of the grid behind the tracker's back
        are skipped and reported as warnings.
        """
        result = OperationResult.success()
        removed = 0
        for client in self._clients.values():
            if not self.grid.contains(client):
                result.add_warning(f"Client {client.id} was already removed from the grid")
                continue
            self.grid.remove(client)
            removed += 1
        self._clients.clear()

        logger.info("Disposed tracker, removed %d clients", removed)
        result.message = f"Removed {removed} clients"
        result.metadata = {"removed": removed, "skipped": len(result.warnings)}
        return result
