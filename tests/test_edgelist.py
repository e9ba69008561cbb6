"""Tests for edge list extraction and label selection."""

import numpy as np
import networkx as nx
import pytest

from arcnet.graph_analysis import (
    EdgeList,
    NetworkBuilder,
    as_edgelist,
    build_edgelist,
    edgelist_to_frame,
    referenced_vertices,
    select_labels,
    vertex_attribute,
    vertex_ids
)


class TestAsEdgelist:

    def test_pairs_are_sorted(self, network):
        edgelist = as_edgelist(network)
        assert edgelist.pairs.tolist() == [[0, 3], [1, 4], [3, 1]]
        assert edgelist.directed
        assert edgelist.n_vertices == 5

    def test_vertex_names_are_compacted(self, network):
        edgelist = as_edgelist(network)
        # vertex 2 (v3) has no ties
        assert edgelist.vertex_names == ['v1', 'v2', 'v4', 'v5']
        assert len(edgelist.vertex_names) == len(edgelist.referenced())
        assert edgelist.isolates().tolist() == [2]

    def test_weights_follow_sorted_pairs(self, config):
        matrix = np.zeros((3, 3))
        matrix[2, 0] = 0.5
        matrix[0, 1] = 2.0
        G = NetworkBuilder(config).construct_network(matrix)
        edgelist = as_edgelist(G)
        assert edgelist.pairs.tolist() == [[0, 1], [2, 0]]
        assert edgelist.weights.tolist() == [2.0, 0.5]

    def test_undirected_pairs_have_smaller_id_first(self, config):
        matrix = np.zeros((4, 4))
        matrix[3, 0] = matrix[0, 3] = 1
        matrix[2, 1] = matrix[1, 2] = 1
        G = NetworkBuilder(config).construct_network(matrix, directed=False)
        edgelist = as_edgelist(G)
        assert not edgelist.directed
        assert edgelist.pairs.tolist() == [[0, 3], [1, 2]]

    def test_string_nodes_without_names(self):
        G = nx.DiGraph()
        G.add_edges_from([('b', 'c'), ('a', 'b')])
        edgelist = as_edgelist(G)
        # ids are positions in G.nodes: b=0, c=1, a=2
        assert edgelist.pairs.tolist() == [[0, 1], [2, 0]]
        assert edgelist.vertex_names == ['b', 'c', 'a']

    def test_empty_network(self, config):
        G = NetworkBuilder(config).construct_network(np.zeros((3, 3)))
        edgelist = as_edgelist(G)
        assert len(edgelist) == 0
        assert edgelist.pairs.shape == (0, 2)
        assert edgelist.vertex_names == []
        assert edgelist.weights is None


class TestReferencedVertices:

    def test_first_appearance_order(self):
        assert referenced_vertices([[3, 1], [1, 4]]).tolist() == [3, 1, 4]

    def test_flattens_row_by_row(self):
        pairs = [[5, 2], [0, 5], [2, 0], [7, 1]]
        assert referenced_vertices(pairs).tolist() == [5, 2, 0, 7, 1]

    def test_accepts_edgelist(self, network):
        assert referenced_vertices(as_edgelist(network)).tolist() == [0, 3, 1, 4]

    def test_empty(self):
        assert referenced_vertices(np.empty((0, 2))).tolist() == []


class TestSelectLabels:

    def test_labels_at_referenced_ids(self, network):
        names = vertex_attribute(network)
        edgelist = as_edgelist(network)
        labels = select_labels(names, edgelist)
        assert labels == ['v1', 'v4', 'v2', 'v5']

    def test_count_excludes_isolated_vertices(self, network):
        names = vertex_attribute(network)
        labels = select_labels(names, as_edgelist(network))
        assert len(names) == 5
        assert len(labels) == 4

    def test_positional_lookup_would_be_wrong(self, network):
        names = vertex_attribute(network)
        edgelist = as_edgelist(network)
        labels = select_labels(names, edgelist)
        assert labels != names[:len(labels)]

    def test_matches_reference_definition(self):
        rng = np.random.default_rng(11)
        names = [f"n{i}" for i in range(30)]
        pairs = rng.integers(0, 30, size=(12, 2))
        ids = list(dict.fromkeys(pairs.ravel().tolist()))
        assert select_labels(names, pairs) == [names[i] for i in ids]

    def test_raw_pairs(self):
        assert select_labels(['a', 'b', 'c'], [[2, 0]]) == ['c', 'a']

    def test_out_of_range_id(self):
        with pytest.raises(IndexError):
            select_labels(['a', 'b'], [[0, 2]])


def test_build_edgelist_drops_partial_weights():
    edgelist = build_edgelist([[1, 0], [0, 1]], ['a', 'b'], weights=[1.0, None])
    assert edgelist.weights is None
    assert edgelist.pairs.tolist() == [[0, 1], [1, 0]]


def test_edgelist_rejects_weight_mismatch():
    with pytest.raises(ValueError):
        EdgeList([[0, 1]], n_vertices=2, weights=[1.0, 2.0])


def test_edgelist_iteration_and_repr(network):
    edgelist = as_edgelist(network)
    assert list(edgelist) == [(0, 3), (1, 4), (3, 1)]
    assert repr(edgelist) == "EdgeList(3 directed edges, 5 vertices)"


def test_edgelist_to_frame(network):
    edgelist = as_edgelist(network)
    frame = edgelist_to_frame(edgelist, vertex_attribute(network))
    assert list(frame.columns) == ['source', 'target', 'source_name', 'target_name', 'weight']
    assert frame['source_name'].tolist() == ['v1', 'v2', 'v4']
    assert frame['target_name'].tolist() == ['v4', 'v5', 'v2']


class TestVertexIds:

    def test_whole_floats_are_accepted(self):
        ids = vertex_ids([[0.0, 2.0]])
        assert ids.dtype.kind == 'i'
        assert ids.tolist() == [[0, 2]]

    @pytest.mark.parametrize("pairs", [[[0.7, 1.2]], [[0, np.nan]], [['a', 'b']], [[True, False]]])
    def test_non_integral_ids_are_rejected(self, pairs):
        with pytest.raises(ValueError):
            vertex_ids(pairs)

    def test_select_labels_does_not_truncate(self):
        with pytest.raises(ValueError, match="whole numbers"):
            select_labels(['a', 'b', 'c'], [[0.7, 1.2]])

    def test_edgelist_rejects_fractional_pairs(self):
        with pytest.raises(ValueError):
            EdgeList([[0.5, 1]], n_vertices=2)
        with pytest.raises(ValueError):
            build_edgelist([[1.5, 0]], ['a', 'b'])
