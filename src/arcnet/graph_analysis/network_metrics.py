"""
Network metrics module
Summary statistics, degrees and communities used to style arc diagrams
"""

import networkx as nx
import community as community_louvain
import logging
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class NetworkAnalyzer:
    """Extract network metrics from graphs."""

    def __init__(self, config: dict):
        """Initialize network analyzer."""
        self.config = config
        self.seed = config['matrix'].get('seed')

    def extract_global_metrics(self, G: nx.Graph) -> Dict[str, float]:
        """
        Extract global network metrics.

        Parameters
        ----------
        G : nx.Graph
            Network graph

        Returns
        -------
        metrics : dict
            Global network metrics
        """
        metrics = {}

        metrics['n_nodes'] = G.number_of_nodes()
        metrics['n_edges'] = G.number_of_edges()
        metrics['directed'] = G.is_directed()
        metrics['density'] = nx.density(G)

        # Isolated vertices never show up in an edge list
        metrics['n_isolates'] = nx.number_of_isolates(G)
        metrics['n_referenced'] = metrics['n_nodes'] - metrics['n_isolates']

        if G.number_of_nodes() == 0:
            metrics['is_connected'] = False
        elif G.is_directed():
            metrics['is_connected'] = nx.is_weakly_connected(G)
            metrics['reciprocity'] = nx.reciprocity(G) if G.number_of_edges() else 0.0
        else:
            metrics['is_connected'] = nx.is_connected(G)

        logger.info(f"Extracted {len(metrics)} global metrics")
        return metrics

    def extract_nodal_metrics(self, G: nx.Graph) -> Dict[int, Dict[str, float]]:
        """
        Extract node-level metrics.

        Parameters
        ----------
        G : nx.Graph
            Network graph

        Returns
        -------
        nodal_metrics : dict
            Dictionary mapping node ids to their metrics
        """
        nodal_metrics = {}
        degree_cent = nx.degree_centrality(G)

        for node in G.nodes():
            nodal_metrics[node] = {
                'degree': G.degree(node),
                'degree_centrality': degree_cent[node]
            }
            if G.is_directed():
                nodal_metrics[node]['in_degree'] = G.in_degree(node)
                nodal_metrics[node]['out_degree'] = G.out_degree(node)

        return nodal_metrics

    def detect_communities(self, G: nx.Graph,
                           algorithm: str = 'louvain') -> Dict[int, int]:
        """
        Detect communities in the network.

        Directed networks are analysed as their undirected version.

        Parameters
        ----------
        G : nx.Graph
            Network graph
        algorithm : str
            'louvain' or 'label_propagation'

        Returns
        -------
        communities : dict
            Mapping of nodes to community IDs
        """
        U = G.to_undirected() if G.is_directed() else G

        if algorithm == 'louvain':
            communities = community_louvain.best_partition(U, random_state=self.seed)
        elif algorithm == 'label_propagation':
            communities_gen = nx.algorithms.community.label_propagation_communities(U)
            communities = {}
            for i, comm in enumerate(communities_gen):
                for node in comm:
                    communities[node] = i
        else:
            raise ValueError(f"Unknown algorithm: {algorithm}")

        n_communities = len(set(communities.values()))
        logger.info(f"Detected {n_communities} communities using {algorithm}")

        return communities

    def modularity(self, G: nx.Graph, communities: Dict[int, int]) -> float:
        """Modularity of a partition; zero for a network without edges."""
        U = G.to_undirected() if G.is_directed() else G
        if U.number_of_edges() == 0:
            return 0.0
        return community_louvain.modularity(communities, U)


def order_by_community(node_ids: Sequence[int],
                       communities: Dict[int, int]) -> List[int]:
    """
    Group node ids by community, keeping their given order within a group.

    Communities appear in the order their first member does.
    """
    rank = {}
    for node in node_ids:
        rank.setdefault(communities[node], len(rank))
    return sorted(node_ids, key=lambda node: rank[communities[node]])


def degree_sizes(G: nx.Graph, node_ids: Sequence[int],
                 base: float = 40.0, scale: float = 30.0,
                 degrees: Optional[Dict[int, int]] = None) -> List[float]:
    """Node marker sizes growing linearly with degree."""
    if degrees is None:
        degrees = dict(G.degree())
    return [base + scale * degrees[node] for node in node_ids]
