"""
Edge list extraction and label alignment

Vertex names are indexed by vertex id, but an edge list only references
the vertices that take part in at least one edge. Labels for an arc
diagram therefore have to be selected at the referenced ids, not read off
the full name array by position.
"""

import numpy as np
import pandas as pd
import networkx as nx
import logging
from typing import List, Optional, Sequence

from .network_builder import VERTEX_NAMES

logger = logging.getLogger(__name__)


def vertex_ids(values) -> np.ndarray:
    """
    Convert vertex ids to an integer array.

    Floats are accepted only when they hold whole numbers; anything else
    raises ValueError instead of being truncated.
    """
    arr = np.asarray(values)
    if arr.size == 0 or np.issubdtype(arr.dtype, np.integer):
        return arr.astype(int)
    if np.issubdtype(arr.dtype, np.bool_):
        raise ValueError("Vertex ids must be integers, got booleans")

    try:
        numeric = arr.astype(float)
    except (TypeError, ValueError):
        raise ValueError(f"Vertex ids must be integers, got dtype {arr.dtype}") from None

    if not np.all(np.isfinite(numeric)) or np.any(numeric != np.round(numeric)):
        raise ValueError("Vertex ids must be whole numbers")
    return numeric.astype(int)


class EdgeList:
    """
    Ordered (source, target) pairs of integer vertex ids.

    Parameters
    ----------
    pairs : array-like
        Edge endpoints [n_edges, 2]
    n_vertices : int
        Vertex count of the network the edges came from
    directed : bool
        Whether pairs are ordered
    weights : array-like, optional
        Per-edge weights
    vertex_names : sequence of str, optional
        Names for the referenced vertices only, in ascending id order
    """

    def __init__(self, pairs, n_vertices: int, directed: bool = True,
                 weights: Optional[Sequence[float]] = None,
                 vertex_names: Optional[Sequence[str]] = None):
        self.pairs = vertex_ids(pairs).reshape(-1, 2)
        self.n_vertices = n_vertices
        self.directed = directed
        self.weights = None if weights is None else np.asarray(weights, dtype=float)
        self.vertex_names = None if vertex_names is None else list(vertex_names)

        if self.weights is not None and len(self.weights) != len(self.pairs):
            raise ValueError(f"Got {len(self.weights)} weights for {len(self.pairs)} edges")

    def __len__(self):
        return len(self.pairs)

    def __iter__(self):
        return (tuple(pair) for pair in self.pairs.tolist())

    def __repr__(self):
        kind = 'directed' if self.directed else 'undirected'
        return f"EdgeList({len(self)} {kind} edges, {self.n_vertices} vertices)"

    @property
    def sources(self) -> np.ndarray:
        return self.pairs[:, 0]

    @property
    def targets(self) -> np.ndarray:
        return self.pairs[:, 1]

    def referenced(self) -> np.ndarray:
        """Vertex ids appearing in at least one edge, first appearance first."""
        return referenced_vertices(self.pairs)

    def isolates(self) -> np.ndarray:
        """Vertex ids of the source network that no edge references."""
        return np.setdiff1d(np.arange(self.n_vertices), self.pairs.ravel())


def as_edgelist(G: nx.Graph, name_attr: str = VERTEX_NAMES) -> EdgeList:
    """
    Extract the edge list of a networkx object.

    Vertices are numbered by their position in ``G.nodes``. Pairs are sorted
    by (source, target); undirected edges are stored with source < target.
    The ``vertex_names`` side attribute is compacted to referenced vertices.

    Parameters
    ----------
    G : nx.Graph or nx.DiGraph
        Network
    name_attr : str
        Vertex attribute holding names; node keys are used where missing

    Returns
    -------
    edgelist : EdgeList
    """
    nodes = list(G.nodes)
    index = {node: i for i, node in enumerate(nodes)}

    pairs = []
    weights = []
    for u, v, weight in G.edges(data='weight'):
        pairs.append((index[u], index[v]))
        weights.append(weight)

    names = [G.nodes[node].get(name_attr, str(node)) for node in nodes]
    return build_edgelist(pairs, names, directed=G.is_directed(), weights=weights)


def build_edgelist(pairs, vertex_names: Sequence[str], directed: bool = True,
                   weights: Optional[Sequence] = None) -> EdgeList:
    """
    Normalise raw pairs into a sorted EdgeList.

    ``vertex_names`` is the full name array; only the names of referenced
    vertices are kept on the result. Weights are dropped unless every edge
    has one.
    """
    pairs = vertex_ids(pairs).reshape(-1, 2)
    if not directed:
        pairs = np.sort(pairs, axis=1)

    order = np.lexsort((pairs[:, 1], pairs[:, 0]))
    pairs = pairs[order]

    if weights is not None:
        weights = np.array(list(weights), dtype=object)[order]
        if len(weights) and all(w is not None for w in weights):
            weights = weights.astype(float)
        else:
            weights = None

    names = np.asarray(vertex_names, dtype=object)
    compact = names[np.unique(pairs)].tolist()

    edgelist = EdgeList(pairs, n_vertices=len(names), directed=directed,
                        weights=weights, vertex_names=compact)
    logger.debug(f"Extracted {edgelist!r}")
    return edgelist


def referenced_vertices(pairs) -> np.ndarray:
    """
    Unique vertex ids in order of first appearance.

    The pair list is flattened row by row, so for [[3, 1], [1, 4]] the
    result is [3, 1, 4].
    """
    if isinstance(pairs, EdgeList):
        pairs = pairs.pairs
    flat = vertex_ids(pairs).reshape(-1)
    return pd.unique(flat)


def select_labels(vertex_names: Sequence[str], edgelist) -> List[str]:
    """
    Select the names of the vertices an edge list references.

    Parameters
    ----------
    vertex_names : sequence of str
        Full name array indexed by vertex id
    edgelist : EdgeList or array-like
        Edge list or raw (source, target) pairs

    Returns
    -------
    labels : list of str
        One label per referenced vertex, in first-appearance order
    """
    names = np.asarray(vertex_names, dtype=object)
    ids = referenced_vertices(edgelist)

    if ids.size and (ids.min() < 0 or ids.max() >= len(names)):
        raise IndexError(f"Edge list references vertex ids outside 0..{len(names) - 1}")

    labels = names[ids].tolist()
    if len(labels) < len(names):
        logger.debug(f"Selected {len(labels)} of {len(names)} labels; "
                     f"{len(names) - len(labels)} vertices are isolated")
    return labels


def edgelist_to_frame(edgelist: EdgeList,
                      vertex_names: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Tabulate an edge list, adding endpoint names when available."""
    frame = pd.DataFrame(edgelist.pairs, columns=['source', 'target'])

    if vertex_names is not None:
        names = np.asarray(vertex_names, dtype=object)
        frame['source_name'] = names[edgelist.sources]
        frame['target_name'] = names[edgelist.targets]

    if edgelist.weights is not None:
        frame['weight'] = edgelist.weights

    return frame
