"""Tests for network construction and metrics."""

import numpy as np
import networkx as nx
import pytest
from scipy import sparse

from arcnet.graph_analysis import (
    NetworkAnalyzer,
    NetworkBuilder,
    order_by_community,
    degree_sizes,
    vertex_attribute
)


class TestNetworkBuilder:

    def test_keeps_isolated_vertices(self, network):
        assert isinstance(network, nx.DiGraph)
        assert network.number_of_nodes() == 5
        assert network.number_of_edges() == 3
        assert nx.number_of_isolates(network) == 1

    def test_names_follow_vertex_ids(self, network):
        assert vertex_attribute(network) == ['v1', 'v2', 'v3', 'v4', 'v5']

    def test_custom_names(self, config, sparse_matrix):
        names = ['a', 'b', 'c', 'd', 'e']
        G = NetworkBuilder(config).construct_network(sparse_matrix, vertex_names=names)
        assert vertex_attribute(G) == names

    def test_wrong_name_count(self, config, sparse_matrix):
        with pytest.raises(ValueError, match="vertex names"):
            NetworkBuilder(config).construct_network(sparse_matrix, vertex_names=['a'])

    def test_sparse_input(self, config, sparse_matrix):
        G = NetworkBuilder(config).construct_network(sparse.csr_matrix(sparse_matrix))
        assert sorted(G.edges()) == [(0, 3), (1, 4), (3, 1)]

    def test_weights_are_stored(self, config):
        matrix = np.array([[0, 0.25], [0, 0]])
        G = NetworkBuilder(config).construct_network(matrix)
        assert G[0][1]['weight'] == 0.25

    def test_undirected_from_asymmetric_matrix(self, config, sparse_matrix):
        G = NetworkBuilder(config).construct_network(sparse_matrix, directed=False)
        assert isinstance(G, nx.Graph) and not G.is_directed()
        assert G.has_edge(3, 0) and G.has_edge(1, 3) and G.has_edge(4, 1)

    def test_self_loops_are_dropped(self, config):
        G = NetworkBuilder(config).construct_network(np.eye(3))
        assert G.number_of_edges() == 0


def test_vertex_attribute_missing(network):
    with pytest.raises(KeyError):
        vertex_attribute(network, 'colour')


class TestNetworkAnalyzer:

    def test_global_metrics(self, config, network):
        metrics = NetworkAnalyzer(config).extract_global_metrics(network)
        assert metrics['n_nodes'] == 5
        assert metrics['n_edges'] == 3
        assert metrics['n_isolates'] == 1
        assert metrics['n_referenced'] == 4
        assert metrics['directed'] is True
        assert metrics['is_connected'] is False
        assert metrics['density'] == pytest.approx(3 / 20)

    def test_nodal_metrics(self, config, network):
        nodal = NetworkAnalyzer(config).extract_nodal_metrics(network)
        assert nodal[3]['degree'] == 2
        assert nodal[3]['in_degree'] == 1
        assert nodal[3]['out_degree'] == 1
        assert nodal[2]['degree'] == 0

    @pytest.mark.parametrize("algorithm", ['louvain', 'label_propagation'])
    def test_communities_cover_all_nodes(self, config, algorithm):
        G = nx.DiGraph()
        G.add_edges_from([(0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3), (2, 3)])
        communities = NetworkAnalyzer(config).detect_communities(G, algorithm=algorithm)
        assert set(communities) == set(G.nodes)
        if algorithm == 'louvain':
            assert communities[0] == communities[1] == communities[2]
            assert communities[3] == communities[4] == communities[5]
            assert communities[0] != communities[3]

    def test_unknown_algorithm(self, config, network):
        with pytest.raises(ValueError):
            NetworkAnalyzer(config).detect_communities(network, algorithm='spectral')

    def test_modularity_without_edges(self, config):
        G = nx.empty_graph(3)
        analyzer = NetworkAnalyzer(config)
        assert analyzer.modularity(G, {0: 0, 1: 1, 2: 2}) == 0.0


def test_order_by_community_groups_nodes():
    communities = {0: 1, 3: 0, 1: 1, 4: 0}
    assert order_by_community([0, 3, 1, 4], communities) == [0, 1, 3, 4]


def test_degree_sizes(network):
    assert degree_sizes(network, [3, 0], base=10, scale=5) == [20, 15]
