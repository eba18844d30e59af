"""
Citation Graph Analytics Package.

This package contains modules for:
1. Expansion (H-index driven growth of a working subgraph)
2. Centrality (Brandes betweenness on undirected citation edges)
3. Cores (k-core decomposition by degree peeling)
"""

# 1. Expansion (H-Index / H-Core)
from .expansion import GraphExpander

# 2. Centrality (Bridges)
from .centrality import betweenness, sorted_betweenness, top_betweenness

# 3. Cores (Cohesive Subgroups)
from .cores import k_core

__all__ = [
    # Expansion
    "GraphExpander",
    # Centrality
    "betweenness",
    "sorted_betweenness",
    "top_betweenness",
    # Cores
    "k_core",
]
