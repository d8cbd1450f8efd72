"""
Fixed-resolution 2D spatial hash grid.

The bounds are split into ``cols x rows`` cells. Each cell holds the head
of a doubly-linked list (a bucket) of membership nodes, one node per client
that overlaps the cell. A client spanning several cells owns one node in
each of them and keeps a small table of its node slots so it can be
detached without searching any bucket.

    +---+---+---+---+
    | a | b | c | d |
    +---+---+---+---+
    | e | f | X | X |     X: a client two cells wide,
    +---+---+---+---+        present in buckets g and h
    | i | j | k | l |
    +---+---+---+---+

Queries walk the buckets of every cell in the query rectangle and use a
per-query stamp on each client so multi-cell clients are reported once.
"""

import itertools
import logging
import numbers
from typing import Any, Dict, Iterator, List, Sequence, Tuple, Union
import numpy as np

from .arena import MembershipArena, NIL
from .client import Client
from .errors import DegenerateFootprintError, InvalidStateError
from .mapping import cell_index as _cell_index, cell_span as _cell_span
from .types import Bounds2D, CellIndex, CellSpan, Vector2, VectorLike, as_vector2

logger = logging.getLogger(__name__)

DEGENERATE_POLICIES = ("clamp", "reject")


def _validate_resolution(resolution: Sequence[int]) -> Tuple[int, int]:
    if len(resolution) != 2:
        raise ValueError(f"resolution must be (cols, rows), got {resolution!r}")
    out = []
    for name, value in zip(("cols", "rows"), resolution):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")
        out.append(int(value))
    return out[0], out[1]


class SpatialHashGrid:
    """
    Fixed-resolution 2D grid of linked-list buckets over a rectangle.

    Not thread-safe: wrap each whole operation in a lock if the grid is
    shared between threads.
    """

    def __init__(
        self,
        bounds: Union[Bounds2D, Sequence[Sequence[float]]],
        resolution: Sequence[int],
        degenerate_policy: str = "clamp",
        initial_capacity: int = 0,
    ):
        """
        Initialize grid.

        Parameters
        ----------
        bounds : Bounds2D or [[x_min, y_min], [x_max, y_max]]
            World rectangle the grid operates on. Positions outside it are
            filed into the nearest boundary cell.
        resolution : (int, int)
            Number of cells along x and y.
        degenerate_policy : {"clamp", "reject"}
            How client extents with a zero or negative component are
            handled. ``"clamp"`` treats the axis as zero-sized (one cell
            wide); ``"reject"`` raises ``DegenerateFootprintError``.
        initial_capacity : int
            Membership slots to pre-allocate.
        """
        if not isinstance(bounds, Bounds2D):
            bounds = Bounds2D.from_min_max(bounds)
        if degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate_policy must be one of {DEGENERATE_POLICIES}, got {degenerate_policy!r}"
            )

        self._bounds = bounds
        self._resolution = _validate_resolution(resolution)
        self.degenerate_policy = degenerate_policy

        self._heads = np.full(self._resolution, NIL, dtype=np.int64)
        self._arena = MembershipArena(initial_capacity)
        self._ids = itertools.count()
        self._query_counter = 0
        self._client_count = 0

    def __repr__(self) -> str:
        return (
            f"SpatialHashGrid(bounds={self._bounds.to_min_max()}, "
            f"resolution={self._resolution}, clients={self._client_count})"
        )

    def __len__(self) -> int:
        return self._client_count

    @property
    def bounds(self) -> Bounds2D:
        return self._bounds

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._resolution

    @property
    def cell_size(self) -> Tuple[float, float]:
        """Nominal cell size, ``bounds / resolution``."""
        return (
            self._bounds.width / self._resolution[0],
            self._bounds.height / self._resolution[1],
        )

    @property
    def query_counter(self) -> int:
        return self._query_counter

    @property
    def client_count(self) -> int:
        return self._client_count

    @property
    def membership_count(self) -> int:
        return len(self._arena)

    @property
    def arena(self) -> MembershipArena:
        return self._arena

    # ------------------------------------------------------------------
    # Index mapping
    # ------------------------------------------------------------------

    def cell_index(self, position: VectorLike) -> CellIndex:
        """Cell a world position falls into (clamped)."""
        p = as_vector2(position)
        self._check_finite(p, "position")
        return _cell_index(p, self._bounds, self._resolution)

    def cell_span(self, position: VectorLike, extent: VectorLike) -> CellSpan:
        """Cell rectangle a footprint would occupy, under this grid's policy."""
        return self._span_for(as_vector2(position), as_vector2(extent))

    @staticmethod
    def _check_finite(v: Vector2, name: str) -> None:
        if not v.is_finite():
            raise ValueError(f"{name} must be finite, got {v.to_tuple()}")

    def _span_for(self, position: Vector2, extent: Vector2, query: bool = False) -> CellSpan:
        self._check_finite(position, "position")
        self._check_finite(extent, "extent")

        if extent.x <= 0 or extent.y <= 0:
            if self.degenerate_policy == "reject" and not query:
                raise DegenerateFootprintError(
                    f"extent must be positive on both axes, got {extent.to_tuple()}"
                )
            if extent.x < 0 or extent.y < 0:
                logger.debug("Clamping negative extent %s to zero", extent.to_tuple())
                extent = Vector2(max(extent.x, 0.0), max(extent.y, 0.0))

        return _cell_span(position, extent, self._bounds, self._resolution)

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    def insert(self, position: VectorLike, extent: VectorLike, payload: Any = None) -> Client:
        """
        Create a client and file it into every cell its footprint covers.

        Parameters
        ----------
        position : Vector2 or (x, y)
            Center of the footprint
        extent : Vector2 or (width, height)
            Full width and height of the footprint
        payload : any
            Caller data, never interpreted by the grid

        Returns
        -------
        client : Client
            Handle for ``update``, ``remove`` and query results
        """
        position = as_vector2(position)
        extent = as_vector2(extent)
        span = self._span_for(position, extent)

        client = Client(
            id=next(self._ids),
            position=position,
            extent=extent,
            payload=payload,
        )
        self._link(client, span)
        return client

    def insert_client(self, client: Client) -> None:
        """
        Re-insert an existing client record at its current position/extent.

        Raises
        ------
        InvalidStateError
            If the client is already in a grid
        """
        if client.is_inserted:
            raise InvalidStateError(f"Client {client.id} is already inserted; remove it first or use update")
        span = self._span_for(client.position, client.extent)
        self._link(client, span)

    def remove(self, client: Client) -> None:
        """
        Detach a client from every cell it occupies.

        Raises
        ------
        InvalidStateError
            If the client is not in this grid
        """
        self._require_inserted(client)
        self._unlink(client)

    def update(self, client: Client) -> bool:
        """
        Re-bucket a client after its position or extent changed.

        Returns
        -------
        relocated : bool
            False when the client still covers the same cells; its
            memberships are then left untouched.

        Raises
        ------
        InvalidStateError
            If the client is not in this grid
        """
        self._require_inserted(client)
        candidate = self._span_for(client.position, client.extent)

        # Most per-frame movement stays within the same cells.
        if candidate == client.span:
            return False

        logger.debug(
            "Relocating client %d from %s-%s to %s-%s",
            client.id,
            client.span.min_index, client.span.max_index,
            candidate.min_index, candidate.max_index,
        )
        self._unlink(client)
        self._link(client, candidate)
        return True

    def contains(self, client: Client) -> bool:
        """True if ``client`` is currently filed in this grid."""
        if client.span is None or client.memberships is None:
            return False
        slot = int(client.memberships[0, 0])
        return self._arena.is_live(slot) and self._arena.owner(slot) is client

    def _require_inserted(self, client: Client) -> None:
        if client.span is None:
            raise InvalidStateError(f"Client {client.id} is not inserted")
        if not self.contains(client):
            raise InvalidStateError(f"Client {client.id} belongs to a different grid")

    def _link(self, client: Client, span: CellSpan) -> None:
        arena = self._arena
        heads = self._heads
        x0, y0 = span.min_index
        table = np.empty((span.width, span.height), dtype=np.int64)

        for x, y in span.cells():
            slot = arena.allocate(client, (x, y))
            heads[x, y] = arena.push_front(slot, int(heads[x, y]))
            table[x - x0, y - y0] = slot

        client.span = span
        client.memberships = table
        self._client_count += 1

    def _unlink(self, client: Client) -> None:
        arena = self._arena
        heads = self._heads
        table = client.memberships
        x0, y0 = client.span.min_index

        for x, y in client.span.cells():
            slot = int(table[x - x0, y - y0])
            prev, nxt = arena.unlink(slot)
            if prev == NIL:
                heads[x, y] = nxt
            arena.free(slot)

        client.span = None
        client.memberships = None
        self._client_count -= 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, center: VectorLike, extent: VectorLike) -> List[Client]:
        """
        Find every client whose cells intersect the query's cells.

        The test is cell-granular: callers wanting exact overlap must
        filter the result themselves.

        Parameters
        ----------
        center : Vector2 or (x, y)
            Center of the query rectangle
        extent : Vector2 or (width, height)
            Full width and height of the query rectangle. Zero or negative
            components are clamped regardless of ``degenerate_policy``.

        Returns
        -------
        clients : list of Client
            Each matching client once, in cell order (x outer, y inner),
            most recently inserted first within a cell.
        """
        span = self._span_for(as_vector2(center), as_vector2(extent), query=True)
        return self._collect(span)

    def query_span(self, span: CellSpan) -> List[Client]:
        """Like ``query`` but for an explicit cell rectangle."""
        cols, rows = self._resolution
        for x, y in (span.min_index, span.max_index):
            if not (0 <= x < cols and 0 <= y < rows):
                raise ValueError(f"Cell {(x, y)} is outside the {cols}x{rows} grid")
        return self._collect(span)

    def _collect(self, span: CellSpan) -> List[Client]:
        arena = self._arena
        heads = self._heads

        self._query_counter += 1
        query_id = self._query_counter

        found = []
        for x, y in span.cells():
            for slot in arena.iter_list(int(heads[x, y])):
                client = arena.owner(slot)
                if client.last_query_id == query_id:
                    continue
                client.last_query_id = query_id
                found.append(client)
        return found

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def cell_clients(self, x: int, y: int) -> List[Client]:
        """Clients in one cell's bucket, head to tail."""
        cols, rows = self._resolution
        if not (0 <= x < cols and 0 <= y < rows):
            raise IndexError(f"Cell {(x, y)} is outside the {cols}x{rows} grid")
        return [self._arena.owner(slot) for slot in self._arena.iter_list(int(self._heads[x, y]))]

    def iter_cells(self) -> Iterator[Tuple[CellIndex, List[Client]]]:
        """Yield ``((x, y), clients)`` for every non-empty cell."""
        for x, y in zip(*np.nonzero(self._heads != NIL)):
            yield (int(x), int(y)), self.cell_clients(int(x), int(y))

    def clients(self) -> List[Client]:
        """All inserted clients, each once, in bucket walk order."""
        seen: Dict[int, Client] = {}
        for _, bucket in self.iter_cells():
            for client in bucket:
                seen.setdefault(id(client), client)
        return list(seen.values())

    def occupancy(self) -> np.ndarray:
        """``(cols, rows)`` array of membership counts per cell."""
        counts = np.zeros(self._resolution, dtype=np.int64)
        for (x, y), bucket in self.iter_cells():
            counts[x, y] = len(bucket)
        return counts

    def clear(self) -> int:
        """Remove every client. Returns how many were removed."""
        clients = self.clients()
        for client in clients:
            self._unlink(client)
        return len(clients)

    def check_invariants(self) -> None:
        """
        Walk every bucket and client table and verify the bookkeeping.

        Raises
        ------
        AssertionError
            On the first inconsistency found
        """
        arena = self._arena
        seen_slots = set()
        clients: Dict[int, Client] = {}

        cols, rows = self._resolution
        for x in range(cols):
            for y in range(rows):
                prev = NIL
                for slot in arena.iter_list(int(self._heads[x, y])):
                    assert arena.is_live(slot), f"dead slot {slot} in cell {(x, y)}"
                    assert slot not in seen_slots, f"slot {slot} linked twice"
                    assert arena.prev(slot) == prev, f"broken prev link at slot {slot}"
                    assert arena.cell(slot) == (x, y), f"slot {slot} filed in wrong cell"
                    client = arena.owner(slot)
                    assert client.span is not None, f"client {client.id} has no span"
                    assert client.span.contains((x, y)), f"client {client.id} does not cover {(x, y)}"
                    assert client.membership_slot((x, y)) == slot, f"client {client.id} table mismatch"
                    seen_slots.add(slot)
                    clients[id(client)] = client
                    prev = slot

        assert len(seen_slots) == len(arena), "arena holds unlinked live slots"
        assert len(clients) == self._client_count, "client count mismatch"
        for client in clients.values():
            assert client.memberships.shape == (client.span.width, client.span.height)
            assert client.memberships.size == client.span.cell_count
