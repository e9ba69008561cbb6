"""Shared fixtures for arcnet tests."""

import matplotlib

matplotlib.use('Agg')

import numpy as np
import pytest

from arcnet.utils import load_config
from arcnet.graph_analysis import NetworkBuilder


@pytest.fixture
def config(tmp_path):
    cfg = load_config()
    cfg['output']['base_dir'] = str(tmp_path / 'outputs')
    cfg['logging']['log_to_file'] = False
    return cfg


@pytest.fixture
def sparse_matrix():
    """Five vertices, ties 0->3, 1->4, 3->1; vertex 2 is isolated."""
    matrix = np.zeros((5, 5))
    matrix[0, 3] = 1
    matrix[1, 4] = 1
    matrix[3, 1] = 1
    return matrix


@pytest.fixture
def network(config, sparse_matrix):
    return NetworkBuilder(config).construct_network(sparse_matrix)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    import matplotlib.pyplot as plt
    plt.close('all')
