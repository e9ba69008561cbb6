"""Adjacency matrix generation package."""

from .matrix_generator import (
    MatrixGenerator,
    random_adjacency,
    default_vertex_names,
    validate_adjacency
)

__all__ = [
    'MatrixGenerator',
    'random_adjacency',
    'default_vertex_names',
    'validate_adjacency'
]
