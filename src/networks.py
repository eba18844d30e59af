import logging
from typing import Iterable

from src.models import Article, EdgeKind, Graph, Node
from src.preprocessing import author_initials, extract_id

logger = logging.getLogger(__name__)


def build_global_graph(articles: Iterable[Article]) -> Graph:
    """
    Constructs the global citation graph from the full article list.

    Steps:
    1. One node per article, keyed by its numeric id.
    2. A citation edge for every reference whose target is also in the
       dataset. References to works outside the dataset are dropped.
    3. Connectivity edges chaining all node ids in lexicographic order, so
       the whole dataset stays traversable regardless of citation sparsity.

    Args:
        articles (Iterable[Article]): Records from the dataset loader.

    Returns:
        Graph: The global graph.
    """
    logger.info("Building global citation graph...")
    articles = list(articles)
    graph = Graph()

    # --- Nodes ---
    for article in articles:
        node_id = extract_id(article.id)
        graph.add_node(Node(node_id, article, author_initials(article.authors)))

    # --- Citation edges ---
    dropped = 0
    for article in articles:
        source = extract_id(article.id)
        for ref in article.referenced_works:
            target = extract_id(ref)
            if source in graph.nodes and target in graph.nodes:
                graph.add_edge(source, target, EdgeKind.CITATION)
            else:
                dropped += 1

    logger.debug(f"Dropped {dropped} references pointing outside the dataset.")

    # --- Connectivity chain ---
    ordered = sorted(graph.nodes)
    for left, right in zip(ordered, ordered[1:]):
        graph.add_edge(left, right, EdgeKind.CONNECTIVITY)

    logger.info(
        f"Global graph: {len(graph.nodes)} nodes, "
        f"{graph.citation_edge_count()} citation edges, "
        f"{len(graph.connectivity_edges)} connectivity edges"
    )
    return graph
