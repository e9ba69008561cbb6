"""Graph analysis package for network construction, edge lists and metrics."""

from .network_builder import NetworkBuilder, vertex_attribute, VERTEX_NAMES
from .edgelist import (
    EdgeList,
    as_edgelist,
    build_edgelist,
    referenced_vertices,
    vertex_ids,
    select_labels,
    edgelist_to_frame
)
from .network_metrics import NetworkAnalyzer, order_by_community, degree_sizes

__all__ = [
    'NetworkBuilder',
    'vertex_attribute',
    'VERTEX_NAMES',
    'EdgeList',
    'as_edgelist',
    'build_edgelist',
    'referenced_vertices',
    'vertex_ids',
    'select_labels',
    'edgelist_to_frame',
    'NetworkAnalyzer',
    'order_by_community',
    'degree_sizes'
]
