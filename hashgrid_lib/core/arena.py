"""
Slot-map storage for bucket membership nodes.

Every membership lives in one slot of a ``MembershipArena``. Links between
nodes of a cell bucket are stored as slot indices (``NIL`` for none), so a
node can be spliced out in O(1) without any object references between
nodes. Freed slots are recycled; each slot has a generation counter that is
bumped on free so a stale ``(slot, generation)`` pair can be detected.
"""

from typing import Any, List, Optional, Tuple

from .errors import StaleMembershipError
from .types import CellIndex


NIL = -1


class MembershipArena:
    """
    Arena of doubly-linked bucket nodes.

    The arena does not know about cells' head pointers; the grid owns
    those and uses ``push_front`` / ``unlink`` to maintain them.
    """

    def __init__(self, initial_capacity: int = 0):
        """
        Initialize arena.

        Parameters
        ----------
        initial_capacity : int
            Number of slots to pre-allocate on the free list
        """
        self._next: List[int] = []
        self._prev: List[int] = []
        self._owner: List[Any] = []
        self._cell: List[Optional[CellIndex]] = []
        self._generation: List[int] = []
        self._free: List[int] = []
        self._live = 0

        for _ in range(initial_capacity):
            self._grow()
        self._free.reverse()

    def _grow(self) -> int:
        slot = len(self._next)
        self._next.append(NIL)
        self._prev.append(NIL)
        self._owner.append(None)
        self._cell.append(None)
        self._generation.append(0)
        self._free.append(slot)
        return slot

    def __len__(self) -> int:
        """Number of live nodes."""
        return self._live

    @property
    def capacity(self) -> int:
        """Number of slots ever allocated, live or free."""
        return len(self._next)

    def allocate(self, owner: Any, cell: CellIndex) -> int:
        """Take a free slot (or grow) and bind it to ``owner`` and ``cell``."""
        if not self._free:
            self._grow()
        slot = self._free.pop()
        self._next[slot] = NIL
        self._prev[slot] = NIL
        self._owner[slot] = owner
        self._cell[slot] = cell
        self._live += 1
        return slot

    def free(self, slot: int) -> None:
        """Release a slot. It must already be unlinked."""
        self._check(slot)
        self._next[slot] = NIL
        self._prev[slot] = NIL
        self._owner[slot] = None
        self._cell[slot] = None
        self._generation[slot] += 1
        self._free.append(slot)
        self._live -= 1

    def is_live(self, slot: int) -> bool:
        return 0 <= slot < len(self._owner) and self._owner[slot] is not None

    def _check(self, slot: int) -> None:
        if not self.is_live(slot):
            raise StaleMembershipError(f"Membership slot {slot} is not live")

    def generation(self, slot: int) -> int:
        """Current generation of a slot (live or free)."""
        return self._generation[slot]

    def handle(self, slot: int) -> Tuple[int, int]:
        """``(slot, generation)`` pair identifying this exact node."""
        self._check(slot)
        return (slot, self._generation[slot])

    def resolve(self, handle: Tuple[int, int]) -> int:
        """Return the slot of ``handle``, raising if it has been freed since."""
        slot, generation = handle
        if not self.is_live(slot) or self._generation[slot] != generation:
            raise StaleMembershipError(
                f"Membership handle {handle} is stale "
                f"(slot generation is {self._generation[slot] if 0 <= slot < self.capacity else 'n/a'})"
            )
        return slot

    def owner(self, slot: int) -> Any:
        self._check(slot)
        return self._owner[slot]

    def cell(self, slot: int) -> CellIndex:
        self._check(slot)
        return self._cell[slot]

    def next(self, slot: int) -> int:
        self._check(slot)
        return self._next[slot]

    def prev(self, slot: int) -> int:
        self._check(slot)
        return self._prev[slot]

    def push_front(self, slot: int, head: int) -> int:
        """
        Link ``slot`` in front of ``head``.

        Returns the new head (``slot``).
        """
        self._next[slot] = head
        self._prev[slot] = NIL
        if head != NIL:
            self._prev[head] = slot
        return slot

    def unlink(self, slot: int) -> Tuple[int, int]:
        """
        Splice ``slot`` out of its list.

        Returns
        -------
        prev, next : int
            The former neighbours. ``prev == NIL`` means ``slot`` was the
            head and the caller must move the head to ``next``.
        """
        self._check(slot)
        prev = self._prev[slot]
        nxt = self._next[slot]
        if nxt != NIL:
            self._prev[nxt] = prev
        if prev != NIL:
            self._next[prev] = nxt
        self._next[slot] = NIL
        self._prev[slot] = NIL
        return prev, nxt

    def iter_list(self, head: int):
        """Yield slots from ``head`` to tail."""
        slot = head
        while slot != NIL:
            nxt = self._next[slot]
            yield slot
            slot = nxt
