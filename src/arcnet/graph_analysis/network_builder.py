"""
Network construction module
Builds networkx objects from adjacency matrices and reads vertex attributes
"""

import numpy as np
import networkx as nx
from scipy import sparse
import logging
from typing import List, Optional, Sequence

from ..matrix_generation import validate_adjacency, default_vertex_names

logger = logging.getLogger(__name__)

VERTEX_NAMES = 'vertex_names'


class NetworkBuilder:
    """Construct network objects from adjacency matrices."""

    def __init__(self, config: dict):
        """
        Initialize network builder.

        Parameters
        ----------
        config : dict
            Configuration dictionary
        """
        self.config = config
        self.directed = config['matrix'].get('directed', True)
        self.name_prefix = config.get('network', {}).get('name_prefix', 'v')

    def construct_network(self, matrix,
                          vertex_names: Optional[Sequence[str]] = None,
                          directed: Optional[bool] = None) -> nx.Graph:
        """
        Construct network from an adjacency matrix.

        Every vertex is added, isolated ones included, so vertex ids stay
        aligned with the matrix rows.

        Parameters
        ----------
        matrix : np.ndarray or scipy.sparse matrix
            Adjacency matrix [n_nodes, n_nodes]
        vertex_names : sequence of str, optional
            Name for each vertex, stored in the ``vertex_names`` attribute
        directed : bool, optional
            Overrides the configured directedness

        Returns
        -------
        G : nx.DiGraph or nx.Graph
            Network with integer vertex ids 0..n-1
        """
        if sparse.issparse(matrix):
            matrix = matrix.toarray()
        matrix = validate_adjacency(matrix)
        n = matrix.shape[0]

        if directed is None:
            directed = self.directed
        if vertex_names is None:
            vertex_names = default_vertex_names(n, prefix=self.name_prefix)
        if len(vertex_names) != n:
            raise ValueError(f"Got {len(vertex_names)} vertex names for {n} vertices")

        G = nx.DiGraph() if directed else nx.Graph()

        for i, name in enumerate(vertex_names):
            G.add_node(i, **{VERTEX_NAMES: name})

        if directed:
            sources, targets = np.nonzero(matrix)
            for i, j in zip(sources, targets):
                G.add_edge(int(i), int(j), weight=float(matrix[i, j]))
        else:
            if not np.allclose(matrix, matrix.T):
                logger.warning("Asymmetric matrix used for an undirected network; "
                               "ties in either direction become edges")
            for i in range(n):
                for j in range(i + 1, n):
                    weight = matrix[i, j] if matrix[i, j] != 0 else matrix[j, i]
                    if weight != 0:
                        G.add_edge(i, j, weight=float(weight))

        logger.info(f"Constructed {'directed' if directed else 'undirected'} network "
                    f"with {G.number_of_nodes()} vertices and {G.number_of_edges()} edges")
        return G


def vertex_attribute(G: nx.Graph, name: str = VERTEX_NAMES) -> List:
    """
    Return a vertex attribute for every vertex, in vertex order.

    Missing values are returned as None; an attribute that no vertex
    carries raises KeyError.
    """
    values = [G.nodes[node].get(name) for node in G.nodes]
    if values and all(value is None for value in values):
        raise KeyError(f"No vertex carries attribute '{name}'")
    return values
