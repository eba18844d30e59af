import logging
from collections import deque
from typing import Dict, List, Tuple

from src.models import Graph

logger = logging.getLogger(__name__)


def betweenness(graph: Graph) -> Dict[str, float]:
    """
    Computes betweenness centrality with Brandes' algorithm.

    Only citation edges are considered and they are treated as undirected.
    Each node is used once as BFS source; dependencies are accumulated in
    reverse discovery order. Since every unordered pair is visited from both
    ends, totals are halved.

    Complexity: O(V * E).

    Args:
        graph (Graph): Graph snapshot (not modified).

    Returns:
        Dict[str, float]: Node id -> unnormalized betweenness score.
    """
    nodes = list(graph.nodes)
    logger.info(f"Calculating betweenness centrality for {len(nodes)} nodes...")

    neighbors = {n: graph.undirected_citation_neighbors(n) for n in nodes}
    scores = dict.fromkeys(nodes, 0.0)

    for source in nodes:
        stack: List[str] = []
        predecessors: Dict[str, List[str]] = {source: []}
        sigma: Dict[str, float] = {source: 1.0}
        distance: Dict[str, int] = {source: 0}

        queue = deque([source])
        while queue:
            current = queue.popleft()
            stack.append(current)

            for neighbor in neighbors[current]:
                if neighbor not in distance:
                    distance[neighbor] = distance[current] + 1
                    sigma[neighbor] = 0.0
                    predecessors[neighbor] = []
                    queue.append(neighbor)

                if distance[neighbor] == distance[current] + 1:
                    sigma[neighbor] += sigma[current]
                    predecessors[neighbor].append(current)

        delta = dict.fromkeys(stack, 0.0)
        while stack:
            node = stack.pop()
            for pred in predecessors[node]:
                delta[pred] += (sigma[pred] / sigma[node]) * (1.0 + delta[node])
            if node != source:
                scores[node] += delta[node]

    return {node: score / 2.0 for node, score in scores.items()}


def sorted_betweenness(scores: Dict[str, float]) -> List[Tuple[str, float]]:
    """Returns (node id, score) pairs ordered by score, highest first."""
    return sorted(scores.items(), key=lambda x: x[1], reverse=True)


def top_betweenness(scores: Dict[str, float], n: int) -> List[Tuple[str, float]]:
    top = sorted_betweenness(scores)[: max(n, 0)]

    logger.info("Top Bridges (High Betweenness):")
    for node_id, score in top:
        logger.info(f"  - {node_id}: {score:.2f}")

    return top
