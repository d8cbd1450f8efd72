"""
Adapter for converting grid occupancy to a networkx proximity graph.
"""

from itertools import combinations
from typing import Iterable, List, Optional, Tuple

import networkx as nx

from ..core.client import Client
from ..core.grid import SpatialHashGrid


def to_proximity_graph(
    grid: SpatialHashGrid,
    clients: Optional[Iterable[Client]] = None,
) -> nx.Graph:
    """
    Build the broad-phase proximity graph of a grid.

    Nodes are the ``Client`` records themselves (hashed by identity), with
    the client's ``id`` kept as the ``id`` node attribute. Client ids are
    only unique per grid, so a record re-homed with ``insert_client`` may
    share its id with a local client. Two clients are joined when they
    share at least one cell; the edge attribute ``shared_cells`` counts
    how many.

    Parameters
    ----------
    grid : SpatialHashGrid
        Grid to read
    clients : iterable of Client, optional
        Restrict the graph to these clients. Default: every client in
        the grid.

    Returns
    -------
    G : networkx.Graph
        Undirected proximity graph
    """
    G = nx.Graph()

    if clients is None:
        members = grid.clients()
    else:
        members = list(clients)
        for client in members:
            if not grid.contains(client):
                raise ValueError(f"Client {client.id} is not in this grid")

    for client in members:
        G.add_node(client, id=client.id)

    for _, bucket in grid.iter_cells():
        bucket = [c for c in bucket if c in G]
        for a, b in combinations(bucket, 2):
            if G.has_edge(a, b):
                G[a][b]["shared_cells"] += 1
            else:
                G.add_edge(a, b, shared_cells=1)

    return G


def candidate_pairs(grid: SpatialHashGrid) -> List[Tuple[Client, Client]]:
    """
    Pairs of clients that share a cell.

    Within a pair the client met first in the bucket walk (x outer, y
    inner, head to tail) comes first; pairs are sorted by those positions.
    """
    order = {}
    for _, bucket in grid.iter_cells():
        for client in bucket:
            order.setdefault(client, len(order))

    pairs = []
    for a, b in to_proximity_graph(grid).edges():
        if order[a] > order[b]:
            a, b = b, a
        pairs.append((a, b))
    pairs.sort(key=lambda p: (order[p[0]], order[p[1]]))
    return pairs
