"""Tests for qualified networkx / igraph access."""

import numpy as np
import networkx as nx
import igraph as ig
import pytest

from arcnet.adapters import from_igraph, get_edgelist, get_vertex_attribute, to_igraph
from arcnet.graph_analysis import NetworkBuilder, as_edgelist, select_labels, vertex_attribute


class TestConversion:

    def test_to_igraph_keeps_vertices_and_names(self, network):
        g = to_igraph(network)
        assert isinstance(g, ig.Graph)
        assert g.is_directed()
        assert g.vcount() == 5
        assert g.ecount() == 3
        assert g.vs['vertex_names'] == ['v1', 'v2', 'v3', 'v4', 'v5']
        assert sorted(g.get_edgelist()) == [(0, 3), (1, 4), (3, 1)]

    def test_round_trip(self, network):
        G = from_igraph(to_igraph(network))
        assert isinstance(G, nx.DiGraph)
        assert list(G.nodes) == list(network.nodes)
        assert sorted(G.edges) == sorted(network.edges)
        assert vertex_attribute(G) == vertex_attribute(network)
        assert G[0][3]['weight'] == 1.0

    def test_undirected(self, config, sparse_matrix):
        G = NetworkBuilder(config).construct_network(sparse_matrix, directed=False)
        g = to_igraph(G)
        assert not g.is_directed()
        assert isinstance(from_igraph(g), nx.Graph)

    def test_unnamed_nodes_get_string_names(self):
        G = nx.path_graph(3)
        g = to_igraph(G)
        assert g.vs['vertex_names'] == ['0', '1', '2']


class TestQualifiedDispatch:

    def test_edgelists_agree(self, network):
        from_nx = get_edgelist(network)
        from_ig = get_edgelist(to_igraph(network))
        assert np.array_equal(from_nx.pairs, from_ig.pairs)
        assert from_nx.vertex_names == from_ig.vertex_names
        assert from_nx.weights.tolist() == from_ig.weights.tolist()
        assert from_ig.n_vertices == 5

    def test_labels_from_igraph_object(self, network):
        g = to_igraph(network)
        labels = select_labels(get_vertex_attribute(g), get_edgelist(g))
        assert labels == select_labels(vertex_attribute(network), as_edgelist(network))

    def test_plain_igraph_graph(self):
        g = ig.Graph(n=4, edges=[(2, 1), (0, 2)], directed=False)
        edgelist = get_edgelist(g)
        assert edgelist.pairs.tolist() == [[0, 2], [1, 2]]
        assert edgelist.weights is None
        assert edgelist.vertex_names == ['0', '1', '2']

    def test_missing_igraph_attribute(self):
        with pytest.raises(KeyError):
            get_vertex_attribute(ig.Graph(n=2), 'vertex_names')

    @pytest.mark.parametrize("func", [get_edgelist, get_vertex_attribute, to_igraph])
    def test_wrong_object_type(self, func):
        with pytest.raises(TypeError, match="networkx"):
            func(np.zeros((3, 3)))

    def test_from_igraph_rejects_networkx(self, network):
        with pytest.raises(TypeError, match="igraph.Graph"):
            from_igraph(network)
