"""
arcnet: edge lists and arc diagrams from networkx and igraph networks
"""

from .matrix_generation import MatrixGenerator, random_adjacency
from .graph_analysis import (
    NetworkBuilder,
    NetworkAnalyzer,
    EdgeList,
    as_edgelist,
    select_labels,
    vertex_attribute
)
from .adapters import to_igraph, from_igraph, get_edgelist, get_vertex_attribute
from .visualization import ArcDiagramVisualizer

__version__ = '0.1.0'

__all__ = [
    'MatrixGenerator',
    'random_adjacency',
    'NetworkBuilder',
    'NetworkAnalyzer',
    'EdgeList',
    'as_edgelist',
    'select_labels',
    'vertex_attribute',
    'to_igraph',
    'from_igraph',
    'get_edgelist',
    'get_vertex_attribute',
    'ArcDiagramVisualizer'
]
