"""
Adjacency matrix generation module
Random Bernoulli graphs, matrix loading and validation
"""

import numpy as np
import pandas as pd
from pathlib import Path
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def random_adjacency(n_nodes: int, edge_prob: float, directed: bool = True,
                     seed: Optional[int] = None) -> np.ndarray:
    """
    Generate a Bernoulli random graph as an adjacency matrix.

    Parameters
    ----------
    n_nodes : int
        Number of vertices
    edge_prob : float
        Probability of each off-diagonal tie
    directed : bool
        If False, the upper triangle is mirrored so the matrix is symmetric
    seed : int, optional
        Random seed for reproducibility

    Returns
    -------
    matrix : np.ndarray
        Binary adjacency matrix [n_nodes, n_nodes] with zero diagonal
    """
    if n_nodes < 1:
        raise ValueError(f"n_nodes must be at least 1, got {n_nodes}")
    if not 0.0 <= edge_prob <= 1.0:
        raise ValueError(f"edge_prob must lie in [0, 1], got {edge_prob}")

    rng = np.random.default_rng(seed)
    matrix = (rng.random((n_nodes, n_nodes)) < edge_prob).astype(float)

    if not directed:
        upper = np.triu(matrix, k=1)
        matrix = upper + upper.T

    np.fill_diagonal(matrix, 0.0)
    return matrix


def default_vertex_names(n_nodes: int, prefix: str = 'v') -> List[str]:
    """Vertex names numbered from 1, e.g. v1..vn."""
    return [f"{prefix}{i + 1}" for i in range(n_nodes)]


def validate_adjacency(matrix) -> np.ndarray:
    """
    Check that a matrix is a usable adjacency matrix.

    The matrix must be two-dimensional and square. Self-loops are not
    represented, so any non-zero diagonal entries are cleared.
    """
    matrix = np.array(matrix, dtype=float)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Adjacency matrix must be square, got shape {matrix.shape}")

    n_loops = int(np.count_nonzero(np.diag(matrix)))
    if n_loops:
        logger.warning(f"Dropping {n_loops} self-loops from adjacency matrix")
        np.fill_diagonal(matrix, 0.0)

    return matrix


class MatrixGenerator:
    """Produce adjacency matrices from configuration or from disk."""

    def __init__(self, config: dict):
        """
        Initialize matrix generator.

        Parameters
        ----------
        config : dict
            Configuration dictionary
        """
        self.config = config
        self.matrix_config = config['matrix']

    def generate(self, seed: Optional[int] = None) -> np.ndarray:
        """Generate a random adjacency matrix using the configured parameters."""
        if seed is None:
            seed = self.matrix_config.get('seed')

        matrix = random_adjacency(
            self.matrix_config['n_nodes'],
            self.matrix_config['edge_prob'],
            directed=self.matrix_config.get('directed', True),
            seed=seed
        )

        logger.info(f"Generated {matrix.shape[0]}x{matrix.shape[1]} adjacency matrix "
                    f"with {int(np.count_nonzero(matrix))} non-zero entries")
        return matrix

    def load_matrix(self, path) -> np.ndarray:
        """
        Load an adjacency matrix from a .npy or headerless .csv file.

        Parameters
        ----------
        path : str or Path
            Matrix file

        Returns
        -------
        matrix : np.ndarray
            Validated adjacency matrix
        """
        path = Path(path)

        if path.suffix == '.npy':
            matrix = np.load(path)
        elif path.suffix == '.csv':
            matrix = pd.read_csv(path, header=None).to_numpy()
        else:
            raise ValueError(f"Unsupported matrix file: {path}")

        logger.info(f"Loaded adjacency matrix from {path}")
        return validate_adjacency(matrix)

    def vertex_names(self, n_nodes: int) -> List[str]:
        prefix = self.config.get('network', {}).get('name_prefix', 'v')
        return default_vertex_names(n_nodes, prefix=prefix)
