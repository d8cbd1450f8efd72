"""
Tests for the membership slot map.
"""

import pytest
from hashgrid_lib.core.arena import MembershipArena, NIL
from hashgrid_lib.core.errors import StaleMembershipError


def test_allocate_and_free_recycles_slots():
    arena = MembershipArena()
    a = arena.allocate("a", (0, 0))
    b = arena.allocate("b", (0, 0))
    assert (a, b) == (0, 1)
    assert len(arena) == 2

    arena.free(a)
    assert len(arena) == 1
    assert not arena.is_live(a)
    assert arena.generation(a) == 1

    c = arena.allocate("c", (1, 1))
    assert c == a
    assert arena.owner(c) == "c"
    assert arena.cell(c) == (1, 1)
    assert arena.capacity == 2


def test_initial_capacity():
    arena = MembershipArena(initial_capacity=3)
    assert arena.capacity == 3
    assert len(arena) == 0
    assert arena.allocate("x", (0, 0)) == 0


def test_stale_handle_detected():
    arena = MembershipArena()
    slot = arena.allocate("a", (0, 0))
    handle = arena.handle(slot)
    assert arena.resolve(handle) == slot

    arena.free(slot)
    with pytest.raises(StaleMembershipError):
        arena.resolve(handle)

    arena.allocate("b", (0, 0))
    with pytest.raises(StaleMembershipError, match="stale"):
        arena.resolve(handle)


def test_dead_slot_access_raises():
    arena = MembershipArena()
    slot = arena.allocate("a", (0, 0))
    arena.free(slot)
    with pytest.raises(StaleMembershipError):
        arena.owner(slot)
    with pytest.raises(StaleMembershipError):
        arena.free(slot)


def test_push_front_and_unlink():
    arena = MembershipArena()
    a = arena.allocate("a", (0, 0))
    b = arena.allocate("b", (0, 0))
    c = arena.allocate("c", (0, 0))

    head = NIL
    head = arena.push_front(a, head)
    head = arena.push_front(b, head)
    head = arena.push_front(c, head)
    assert list(arena.iter_list(head)) == [c, b, a]

    # middle node
    prev, nxt = arena.unlink(b)
    assert (prev, nxt) == (c, a)
    assert list(arena.iter_list(head)) == [c, a]
    assert arena.prev(a) == c

    # head node
    prev, nxt = arena.unlink(c)
    assert prev == NIL
    head = nxt
    assert list(arena.iter_list(head)) == [a]
    assert arena.prev(a) == NIL

    # last node
    prev, nxt = arena.unlink(a)
    assert (prev, nxt) == (NIL, NIL)
