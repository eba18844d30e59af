import logging
import os
from typing import Dict, Iterable, Optional, Set

import pandas as pd

from src.models import Graph, HIndexResult, NodeRole

logger = logging.getLogger(__name__)


def assign_roles(
    graph: Graph,
    seeds: Iterable[str],
    h_results: Optional[Dict[str, HIndexResult]] = None,
    k_core_nodes: Optional[Set[str]] = None,
) -> Dict[str, NodeRole]:
    """
    Builds the id -> role side table consumed by display layers.

    Precedence (highest first): k-core member, seed, H-core member.
    Nodes outside the graph are ignored.
    """
    roles = dict.fromkeys(graph.nodes, NodeRole.UNSELECTED)

    for result in (h_results or {}).values():
        for node_id in result.h_core:
            if node_id in roles:
                roles[node_id] = NodeRole.H_CORE

    for seed in seeds:
        if seed in roles:
            roles[seed] = NodeRole.SEED

    for node_id in k_core_nodes or ():
        if node_id in roles:
            roles[node_id] = NodeRole.K_CORE

    return roles


def build_metrics_frame(
    graph: Graph,
    global_graph: Graph,
    scores: Dict[str, float],
    roles: Dict[str, NodeRole],
) -> pd.DataFrame:
    """
    Tabulates per-node metrics of the working graph.

    Citation counts come from the global graph; betweenness and roles from
    the working graph analysis. Rows are ordered by betweenness, highest first.
    """
    rows = []
    for node_id, node in graph.nodes.items():
        rows.append(
            {
                "id": node_id,
                "initials": node.author_initials,
                "title": node.article.title,
                "year": node.article.year,
                "citations": global_graph.incoming_citation_count(node_id),
                "references": global_graph.outgoing_citation_count(node_id),
                "betweenness": scores.get(node_id, 0.0),
                "role": roles.get(node_id, NodeRole.UNSELECTED).value,
            }
        )

    columns = [
        "id",
        "initials",
        "title",
        "year",
        "citations",
        "references",
        "betweenness",
        "role",
    ]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values("betweenness", ascending=False, kind="stable").reset_index(
        drop=True
    )


def save_metrics(df: pd.DataFrame, path: str) -> None:
    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    df.to_csv(path, index=False)
    logger.info(f"Node metrics saved to: {path}")
