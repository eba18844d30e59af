import logging
from typing import Set

from src.models import Graph

logger = logging.getLogger(__name__)


def _degree_within(graph: Graph, node_id: str, alive: Set[str]) -> int:
    return sum(1 for n in graph.undirected_citation_neighbors(node_id) if n in alive)


def k_core(graph: Graph, k: int) -> Set[str]:
    """
    Finds the k-core by repeated degree peeling.

    Every pass removes all nodes whose citation degree within the surviving
    set is below k, then recomputes degrees from scratch. Peeling stops at
    the first pass that removes nothing.

    The graph should be the output of `Graph.to_undirected_citation_graph()`
    so degrees are symmetric.

    Args:
        graph (Graph): Undirected citation-only graph snapshot.
        k (int): Minimum degree, at least 1.

    Returns:
        Set[str]: Ids of the nodes in the k-core (possibly empty).

    Raises:
        ValueError: If k < 1.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    alive = set(graph.nodes)
    degrees = {n: _degree_within(graph, n, alive) for n in alive}
    passes = 0

    while True:
        to_remove = [n for n in alive if degrees[n] < k]
        if not to_remove:
            break

        passes += 1
        alive.difference_update(to_remove)
        degrees = {n: _degree_within(graph, n, alive) for n in alive}

    logger.info(
        f"{k}-core: {len(alive)} of {len(graph.nodes)} nodes survive ({passes} peeling passes)"
    )
    return alive
