import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import networkx as nx

logger = logging.getLogger(__name__)


class EdgeKind(Enum):
    """
    Edge types of the citation graph.

    - CITATION ("black"): a real reference, used by every metric.
    - CONNECTIVITY ("green"): synthetic link that keeps the dataset traversable.
      Ignored by every algorithm.
    """

    CITATION = "citation"
    CONNECTIVITY = "connectivity"


class NodeRole(Enum):
    """Display role assigned by callers after running an algorithm."""

    UNSELECTED = "unselected"
    SEED = "seed"
    H_CORE = "h_core"
    K_CORE = "k_core"


@dataclass(frozen=True)
class Article:
    """A bibliographic record as delivered by the dataset loader."""

    id: str
    title: str = ""
    year: int = 0
    authors: Tuple[str, ...] = ()
    referenced_works: Tuple[str, ...] = ()
    doi: Optional[str] = None
    venue: Optional[str] = None
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    kind: EdgeKind


@dataclass
class Node:
    """
    A graph vertex keyed by the numeric id of its article.

    `incoming` holds ids of nodes citing this one, `outgoing` the ids this node
    cites. Both only ever contain ids present in the owning graph.
    """

    numeric_id: str
    article: Article
    author_initials: str = "?"
    incoming: List[str] = field(default_factory=list)
    outgoing: List[str] = field(default_factory=list)

    def copy(self) -> "Node":
        """Returns a node sharing the article but with empty adjacency."""
        return Node(self.numeric_id, self.article, self.author_initials)


@dataclass
class HIndexResult:
    h_index: int = 0
    h_core: List[str] = field(default_factory=list)
    h_median: float = 0.0


class Graph:
    """
    Directed multigraph of articles with typed edges.

    All mutation goes through `add_node` and `add_edge`, which keeps the
    adjacency lists and the inbound citation count memo consistent.
    """

    def __init__(self) -> None:
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge] = []
        self.connectivity_edges: List[Edge] = []
        self._incoming_citation_counts: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def add_node(self, node: Node) -> None:
        if node.numeric_id not in self.nodes:
            self.nodes[node.numeric_id] = node

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> None:
        """
        Appends an edge to the edge list.

        The edge is recorded even when an endpoint is unknown; adjacency lists
        are only updated for citation edges whose endpoints both exist.
        """
        edge = Edge(source, target, kind)
        self.edges.append(edge)

        if kind is EdgeKind.CONNECTIVITY:
            self.connectivity_edges.append(edge)
            return

        # Counted by edge scan, known source or not
        self._incoming_citation_counts.pop(target, None)
        if source in self.nodes and target in self.nodes:
            self.nodes[source].outgoing.append(target)
            self.nodes[target].incoming.append(source)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_edge(self, source: str, target: str, kind: EdgeKind) -> bool:
        return Edge(source, target, kind) in self.edges

    def undirected_citation_neighbors(self, node_id: str) -> List[str]:
        """
        Union of citing and cited ids for a node, without duplicates.

        This is the undirected adjacency every metric works on.
        Unknown ids have no neighbors.
        """
        node = self.nodes.get(node_id)
        if node is None:
            return []
        return list(dict.fromkeys(node.incoming + node.outgoing))

    def neighbors(self, node_id: str, citation_only: bool = True) -> List[str]:
        """
        Undirected neighbors of a node.

        With `citation_only=False` every edge kind is scanned, including
        connectivity edges and edges pointing at unknown ids.
        """
        if citation_only:
            return self.undirected_citation_neighbors(node_id)

        found: Dict[str, None] = {}
        for edge in self.edges:
            if edge.source == node_id:
                found[edge.target] = None
            if edge.target == node_id:
                found[edge.source] = None
        return list(found)

    def incoming_citation_count(self, node_id: str) -> int:
        if node_id not in self._incoming_citation_counts:
            self._incoming_citation_counts[node_id] = sum(
                1
                for e in self.edges
                if e.target == node_id and e.kind is EdgeKind.CITATION
            )
        return self._incoming_citation_counts[node_id]

    def outgoing_citation_count(self, node_id: str) -> int:
        return sum(
            1 for e in self.edges if e.source == node_id and e.kind is EdgeKind.CITATION
        )

    def citation_edge_count(self) -> int:
        return sum(1 for e in self.edges if e.kind is EdgeKind.CITATION)

    def to_undirected_citation_graph(self) -> "Graph":
        """
        Builds a symmetric citation-only copy of this graph.

        Every node is copied with fresh adjacency lists. Each citation edge
        (u, v) becomes the pair (u, v) and (v, u); connectivity edges are
        dropped. Used before k-core decomposition so degrees are symmetric.
        """
        undirected = Graph()
        for node in self.nodes.values():
            undirected.add_node(node.copy())

        for edge in self.edges:
            if edge.kind is EdgeKind.CITATION:
                undirected.add_edge(edge.source, edge.target, EdgeKind.CITATION)
                undirected.add_edge(edge.target, edge.source, EdgeKind.CITATION)

        return undirected

    def clear_cache(self) -> None:
        self._incoming_citation_counts.clear()

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Exports the graph as a NetworkX MultiDiGraph.

        Node attributes: title, year, initials. Each edge carries its kind
        as the string value of `EdgeKind`. Edges pointing at unknown ids are
        skipped so the export only holds known nodes.
        """
        G = nx.MultiDiGraph()
        for node_id, node in self.nodes.items():
            G.add_node(
                node_id,
                title=node.article.title,
                year=node.article.year,
                initials=node.author_initials,
            )

        for edge in self.edges:
            if edge.source in self.nodes and edge.target in self.nodes:
                G.add_edge(edge.source, edge.target, kind=edge.kind.value)

        logger.debug(
            f"Exported graph with {G.number_of_nodes()} nodes and {G.number_of_edges()} edges"
        )
        return G
