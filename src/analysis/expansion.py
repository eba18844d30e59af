import logging
from typing import List, Tuple

import numpy as np

from src.models import EdgeKind, Graph, HIndexResult

logger = logging.getLogger(__name__)


class GraphExpander:
    """
    Grows a working subgraph around seed articles using their H-core.

    The global graph is only read. Each expansion adds the H-core of the
    seed to the working graph and then re-derives the edges induced by the
    working node set, so the working graph only ever grows.
    """

    def __init__(self, global_graph: Graph) -> None:
        self.global_graph = global_graph

    def calculate_h_index(self, seed_id: str) -> HIndexResult:
        """
        Computes the H-index of an article from the citations of its citers.

        Citers are ranked by their own inbound citation count (descending,
        ties keep the order in which they cite the seed). The H-index is the
        largest h such that the h-th ranked citer has at least h citations.

        Args:
            seed_id (str): Numeric id of the article.

        Returns:
            HIndexResult: H-index, H-core ids and the median citation count
            within the H-core. Unknown seeds yield an empty result.
        """
        seed = self.global_graph.get_node(seed_id)
        if seed is None:
            logger.debug(f"Seed {seed_id} not in global graph; H-index is 0.")
            return HIndexResult()

        counts: List[Tuple[str, int]] = [
            (citer, self.global_graph.incoming_citation_count(citer))
            for citer in seed.incoming
        ]
        # sorted() is stable, ties keep incoming order
        counts = sorted(counts, key=lambda x: x[1], reverse=True)

        h_index = 0
        for rank, (_, count) in enumerate(counts, 1):
            if count >= rank:
                h_index = rank
            else:
                break

        if h_index == 0:
            return HIndexResult()

        core = counts[:h_index]
        return HIndexResult(
            h_index=h_index,
            h_core=[citer for citer, _ in core],
            h_median=float(np.median([count for _, count in core])),
        )

    def expand(self, working_graph: Graph, seed_id: str) -> HIndexResult:
        """
        Adds the H-core of `seed_id` to `working_graph` in place.

        When the H-index is 0 the working graph is left untouched. Otherwise
        missing H-core nodes are copied from the global graph and every
        global edge whose endpoints are both in the working graph is added
        if not already present.
        """
        result = self.calculate_h_index(seed_id)
        if result.h_index == 0:
            logger.info(f"Article {seed_id} has H-index 0; nothing to expand.")
            return result

        added = 0
        for core_id in result.h_core:
            if core_id in working_graph.nodes:
                continue
            global_node = self.global_graph.get_node(core_id)
            if global_node is not None:
                working_graph.add_node(global_node.copy())
                added += 1

        new_edges = self._add_induced_edges(working_graph)

        logger.info(
            f"Expanded {seed_id}: h={result.h_index}, "
            f"+{added} nodes, +{new_edges} edges "
            f"(working graph: {len(working_graph.nodes)} nodes)"
        )
        return result

    def _add_induced_edges(self, working_graph: Graph) -> int:
        present = set(working_graph.nodes)
        existing = set(working_graph.edges)
        added = 0

        # Citation edges first, then the connectivity chain
        for kind, edges in (
            (EdgeKind.CITATION, self.global_graph.edges),
            (EdgeKind.CONNECTIVITY, self.global_graph.connectivity_edges),
        ):
            for edge in edges:
                if edge.kind is not kind or edge in existing:
                    continue
                if edge.source in present and edge.target in present:
                    working_graph.add_edge(edge.source, edge.target, kind)
                    existing.add(edge)
                    added += 1

        return added
