"""Conversion and qualified dispatch between networkx and igraph."""

from .namespaces import (
    to_igraph,
    from_igraph,
    get_edgelist,
    get_vertex_attribute
)

__all__ = [
    'to_igraph',
    'from_igraph',
    'get_edgelist',
    'get_vertex_attribute'
]
