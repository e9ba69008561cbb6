"""
Qualified access to networkx and igraph objects

Both libraries export a ``Graph`` class and edge-list / vertex-attribute
accessors with overlapping names. Importing them unqualified lets one
shadow the other, and the wrong function then fails against the other
library's object with a type error. Every call here is spelled with its
module prefix and dispatched on the object's type.
"""

import networkx as nx
import igraph as ig
import logging
from typing import List

from ..graph_analysis.network_builder import VERTEX_NAMES, vertex_attribute
from ..graph_analysis.edgelist import EdgeList, as_edgelist, build_edgelist

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = 'networkx.Graph, networkx.DiGraph or igraph.Graph'


def _unsupported(graph, operation: str) -> TypeError:
    kind = f"{type(graph).__module__}.{type(graph).__name__}"
    return TypeError(f"{operation}() got an object of type {kind}; "
                     f"expected {SUPPORTED_TYPES}. Qualify the call with the "
                     f"module that owns the object (networkx.* or igraph.Graph.*)")


def to_igraph(G: nx.Graph) -> ig.Graph:
    """
    Convert a networkx object to igraph, keeping vertex order.

    igraph vertices are numbered 0..n-1 by position in ``G.nodes``; vertex
    and edge attributes are copied.
    """
    if not isinstance(G, nx.Graph):
        raise _unsupported(G, 'to_igraph')

    nodes = list(G.nodes)
    index = {node: i for i, node in enumerate(nodes)}

    g = ig.Graph(n=len(nodes), directed=G.is_directed())
    g.add_edges([(index[u], index[v]) for u, v in G.edges()])

    vertex_keys = set()
    for node in nodes:
        vertex_keys.update(G.nodes[node])
    for key in vertex_keys:
        g.vs[key] = [G.nodes[node].get(key) for node in nodes]
    if VERTEX_NAMES not in vertex_keys:
        g.vs[VERTEX_NAMES] = [str(node) for node in nodes]

    edge_keys = set()
    for _, _, data in G.edges(data=True):
        edge_keys.update(data)
    for key in edge_keys:
        g.es[key] = [data.get(key) for _, _, data in G.edges(data=True)]

    logger.debug(f"Converted networkx graph to igraph: {g.vcount()} vertices, "
                 f"{g.ecount()} edges")
    return g


def from_igraph(g: ig.Graph) -> nx.Graph:
    """Convert an igraph object to networkx with integer vertex ids."""
    if not isinstance(g, ig.Graph):
        raise _unsupported(g, 'from_igraph')

    G = nx.DiGraph() if g.is_directed() else nx.Graph()

    for vertex in g.vs:
        G.add_node(vertex.index, **vertex.attributes())
    for edge in g.es:
        G.add_edge(edge.source, edge.target, **edge.attributes())

    return G


def get_edgelist(graph) -> EdgeList:
    """
    Edge list of a networkx or igraph object.

    The two libraries return the same pairs for the same network; igraph
    ids are its vertex indices, networkx ids are positions in ``G.nodes``.
    """
    if isinstance(graph, nx.Graph):
        return as_edgelist(graph)

    if isinstance(graph, ig.Graph):
        pairs = ig.Graph.get_edgelist(graph)
        if VERTEX_NAMES in graph.vs.attributes():
            names = graph.vs[VERTEX_NAMES]
        else:
            names = [str(i) for i in range(graph.vcount())]
        weights = graph.es['weight'] if 'weight' in graph.es.attributes() else None
        return build_edgelist(pairs, names, directed=graph.is_directed(),
                              weights=weights)

    raise _unsupported(graph, 'get_edgelist')


def get_vertex_attribute(graph, name: str = VERTEX_NAMES) -> List:
    """Full vertex attribute array of a networkx or igraph object."""
    if isinstance(graph, nx.Graph):
        return vertex_attribute(graph, name)

    if isinstance(graph, ig.Graph):
        if name not in graph.vs.attributes():
            raise KeyError(f"No vertex carries attribute '{name}'")
        return list(graph.vs[name])

    raise _unsupported(graph, 'get_vertex_attribute')
