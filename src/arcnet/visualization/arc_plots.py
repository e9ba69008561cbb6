"""
Visualization module for arc diagrams
Includes arc diagrams, adjacency heatmaps and node-link drawings
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Arc
from matplotlib.colors import is_color_like, to_rgb
import seaborn as sns
import networkx as nx
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..graph_analysis.edgelist import EdgeList, referenced_vertices, vertex_ids
from ..graph_analysis.network_builder import VERTEX_NAMES

logger = logging.getLogger(__name__)


def _as_pairs(edgelist) -> np.ndarray:
    if isinstance(edgelist, EdgeList):
        return edgelist.pairs
    return vertex_ids(edgelist).reshape(-1, 2)


def _per_item(value, n: int, what: str, color: bool = False) -> list:
    """
    Broadcast a scalar option, or check a per-item sequence has n entries.

    With ``color=True`` a single colour spec such as an RGB tuple counts
    as a scalar.
    """
    if value is None or isinstance(value, (str, int, float, np.number)):
        return [value] * n
    if color and is_color_like(value):
        return [value] * n
    value = list(value)
    if len(value) != n:
        raise ValueError(f"Got {len(value)} {what} for {n} items")
    return value


def arc_layout(edgelist, labels: Optional[Sequence[str]] = None,
               sort_nodes: bool = False,
               ordering: Optional[Sequence[int]] = None) -> Tuple[List[int], List[str]]:
    """
    One-dimensional node order for an arc diagram.

    Parameters
    ----------
    edgelist : EdgeList or array-like
        Edges to draw
    labels : sequence of str, optional
        One label per referenced vertex, in first-appearance order
        (as returned by ``select_labels``). Defaults to the edge list's
        ``vertex_names`` or to the vertex ids.
    sort_nodes : bool
        Order nodes by label instead of by first appearance
    ordering : sequence of int, optional
        Explicit order of vertex ids; must cover every referenced vertex

    Returns
    -------
    order : list of int
        Vertex ids from left (or bottom) to right (or top)
    ordered_labels : list of str
        Labels matching ``order``
    """
    pairs = _as_pairs(edgelist)
    nodes = [int(node) for node in referenced_vertices(pairs)]

    if labels is None:
        if isinstance(edgelist, EdgeList) and edgelist.vertex_names is not None:
            by_id = dict(zip(np.unique(pairs).tolist(), edgelist.vertex_names))
            labels = [str(by_id[node]) for node in nodes]
        else:
            labels = [str(node) for node in nodes]
    elif len(labels) != len(nodes):
        raise ValueError(f"Got {len(labels)} labels for {len(nodes)} vertices referenced "
                         f"by the edge list; select them with select_labels()")

    label_of = dict(zip(nodes, labels))

    if ordering is not None:
        order = [int(node) for node in ordering]
        if sorted(order) != sorted(nodes):
            raise ValueError("ordering must list each referenced vertex exactly once")
    elif sort_nodes:
        order = sorted(nodes, key=lambda node: label_of[node])
    else:
        order = nodes

    return order, [label_of[node] for node in order]


class ArcDiagramVisualizer:
    """Draw edge lists as arc diagrams, plus matrix and network views."""

    def __init__(self, config: dict):
        """Initialize visualizer with configuration."""
        self.config = config
        self.arc_config = config['arcplot']

        plt.style.use(config['visualization']['figure']['style'])
        self.dpi = config['visualization']['figure']['dpi']
        self.format = config['visualization']['figure']['format']

    def plot_arcs(self, edgelist: Union[EdgeList, np.ndarray],
                  labels: Optional[Sequence[str]] = None,
                  sort_nodes: Optional[bool] = None,
                  ordering: Optional[Sequence[int]] = None,
                  horizontal: Optional[bool] = None,
                  above: Optional[Sequence] = None,
                  arc_colors=None,
                  arc_widths=None,
                  node_sizes=None,
                  node_colors=None,
                  show_nodes: bool = True,
                  title: Optional[str] = None,
                  ax: Optional[plt.Axes] = None,
                  save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot an edge list as an arc diagram.

        Nodes sit on a single axis and each edge is a semicircle joining its
        endpoints. Per-node options (``node_sizes``, ``node_colors``) follow
        the order of ``labels``, i.e. first appearance in the edge list.

        Parameters
        ----------
        edgelist : EdgeList or array-like
            Edges to draw [n_edges, 2]
        labels : sequence of str, optional
            One label per referenced vertex
        sort_nodes : bool, optional
            Order nodes alphabetically by label
        ordering : sequence of int, optional
            Explicit vertex order
        horizontal : bool, optional
            Horizontal axis (default) or vertical axis
        above : sequence, optional
            Edge indices, or a boolean mask, of arcs drawn above the axis;
            the others go below
        arc_colors, arc_widths : scalar or sequence, optional
            Per-edge styling; widths follow edge weights when available
        node_sizes, node_colors : scalar or sequence, optional
            Per-node styling
        show_nodes : bool
            Whether to draw node markers
        title : str, optional
            Plot title
        ax : matplotlib.Axes, optional
            Axes to draw on; a new figure is created otherwise
        save_path : str, optional
            Path to save figure

        Returns
        -------
        fig : matplotlib.Figure
        """
        pairs = _as_pairs(edgelist)
        n_edges = len(pairs)

        if sort_nodes is None:
            sort_nodes = self.arc_config.get('sorted', False)
        if horizontal is None:
            horizontal = self.arc_config.get('horizontal', True)

        first_seen = [int(node) for node in referenced_vertices(pairs)]
        order, ordered_labels = arc_layout(edgelist, labels, sort_nodes, ordering)
        position = {node: k for k, node in enumerate(order)}

        # Per-node options are given in first-appearance order
        sizes = dict(zip(first_seen, _per_item(
            self.arc_config['node_size'] if node_sizes is None else node_sizes,
            len(first_seen), 'node sizes')))
        colors = dict(zip(first_seen, _per_item(
            self.arc_config['node_color'] if node_colors is None else node_colors,
            len(first_seen), 'node colors', color=True)))

        edge_colors = _per_item(
            self.arc_config['arc_color'] if arc_colors is None else arc_colors,
            n_edges, 'arc colors', color=True)
        edge_widths = _per_item(
            self._default_widths(edgelist) if arc_widths is None else arc_widths,
            n_edges, 'arc widths')
        is_above = self._above_mask(above, n_edges)

        if ax is None:
            figsize = (12, 6) if horizontal else (6, 12)
            fig, ax = plt.subplots(figsize=figsize, dpi=self.dpi)
        else:
            fig = ax.figure

        max_radius = 0.5
        for e, (s, t) in enumerate(pairs.tolist()):
            x1, x2 = position[s], position[t]
            radius = abs(x2 - x1) / 2.0
            if radius == 0:
                continue
            max_radius = max(max_radius, radius)
            middle = (x1 + x2) / 2.0

            if horizontal:
                center = (middle, 0.0)
                theta1, theta2 = (0, 180) if is_above[e] else (180, 360)
            else:
                center = (0.0, middle)
                theta1, theta2 = (-90, 90) if is_above[e] else (90, 270)

            ax.add_patch(Arc(center, 2 * radius, 2 * radius,
                             theta1=theta1, theta2=theta2,
                             color=edge_colors[e], linewidth=edge_widths[e],
                             alpha=self.arc_config.get('arc_alpha', 0.6)))

        axis = np.arange(len(order))
        zeros = np.zeros(len(order))
        xs, ys = (axis, zeros) if horizontal else (zeros, axis)

        if show_nodes and len(order):
            ax.scatter(xs, ys,
                       s=[sizes[node] for node in order],
                       c=[colors[node] for node in order],
                       zorder=3, edgecolors='black', linewidths=0.5)

        if horizontal:
            ax.set_xticks(axis)
            ax.set_xticklabels(ordered_labels, rotation=90)
            ax.set_yticks([])
            ax.set_xlim(-1, len(order))
            low = -max_radius if not all(is_above) else -0.5
            ax.set_ylim(low - 0.5, max_radius + 0.5)
        else:
            ax.set_yticks(axis)
            ax.set_yticklabels(ordered_labels)
            ax.set_xticks([])
            ax.set_ylim(-1, len(order))
            low = -max_radius if not all(is_above) else -0.5
            ax.set_xlim(low - 0.5, max_radius + 0.5)

        ax.set_aspect('equal')
        for side in ['top', 'right', 'left', 'bottom']:
            ax.spines[side].set_visible(False)

        if title:
            ax.set_title(title, fontsize=14, fontweight='bold')

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, format=self.format, bbox_inches='tight')
            logger.info(f"Saved arc diagram to {save_path}")

        return fig

    def _default_widths(self, edgelist) -> Union[float, np.ndarray]:
        base = self.arc_config.get('arc_width', 1.5)
        weights = edgelist.weights if isinstance(edgelist, EdgeList) else None
        if weights is None or len(weights) == 0 or np.ptp(weights) == 0:
            return base
        return 0.5 + 2 * base * np.abs(weights) / np.abs(weights).max()

    def _above_mask(self, above, n_edges: int) -> List[bool]:
        if above is None:
            fraction = self.arc_config.get('above_fraction', 1.0)
            n_above = int(round(fraction * n_edges))
            return [e < n_above for e in range(n_edges)]

        above = list(above)
        if above and all(isinstance(a, (bool, np.bool_)) for a in above):
            if len(above) != n_edges:
                raise ValueError(f"Got a mask of {len(above)} values for {n_edges} arcs")
            return [bool(a) for a in above]
        if any(isinstance(a, (bool, np.bool_)) for a in above):
            raise ValueError("above mixes booleans and arc indices")

        mask = [False] * n_edges
        for e in above:
            if not 0 <= e < n_edges:
                raise IndexError(f"Arc index {e} out of range for {n_edges} edges")
            mask[e] = True
        return mask

    def plot_adjacency_matrix(self, matrix: np.ndarray,
                              vertex_names: Optional[Sequence[str]] = None,
                              title: str = "Adjacency Matrix",
                              save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot adjacency matrix as heatmap.

        Parameters
        ----------
        matrix : np.ndarray
            Adjacency matrix
        vertex_names : sequence of str, optional
            Row and column labels
        title : str
            Plot title
        save_path : str, optional
            Path to save figure

        Returns
        -------
        fig : matplotlib.Figure
        """
        fig, ax = plt.subplots(figsize=(8, 7), dpi=self.dpi)
        ticks = list(vertex_names) if vertex_names is not None else 'auto'

        sns.heatmap(
            matrix,
            xticklabels=ticks,
            yticklabels=ticks,
            cmap='Greys',
            vmin=0,
            square=True,
            linewidths=0.5,
            linecolor='lightgrey',
            cbar_kws={'label': 'Tie'},
            ax=ax
        )

        ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
        ax.set_xlabel('Target')
        ax.set_ylabel('Source')

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, format=self.format, bbox_inches='tight')
            logger.info(f"Saved adjacency matrix to {save_path}")

        return fig

    def plot_network(self, G: nx.Graph,
                     title: str = "Network",
                     communities: Optional[Dict[int, int]] = None,
                     save_path: Optional[str] = None) -> plt.Figure:
        """
        Node-link drawing of the network, isolated vertices in grey.

        Parameters
        ----------
        G : nx.Graph
            Network graph
        title : str
            Plot title
        communities : dict, optional
            Node to community id, used for node colours
        save_path : str, optional
            Path to save figure

        Returns
        -------
        fig : matplotlib.Figure
        """
        fig, ax = plt.subplots(figsize=(10, 8), dpi=self.dpi)
        pos = nx.spring_layout(G, seed=self.config['matrix'].get('seed'))

        isolates = set(nx.isolates(G))
        if communities is not None:
            palette = sns.color_palette('tab10')
            grey = to_rgb('lightgrey')
            node_color = [grey if node in isolates else palette[communities[node] % len(palette)]
                          for node in G.nodes()]
        else:
            node_color = ['lightgrey' if node in isolates else self.arc_config['node_color']
                          for node in G.nodes()]

        nx.draw_networkx_nodes(G, pos, node_color=node_color, node_size=400,
                               edgecolors='black', ax=ax)
        nx.draw_networkx_edges(G, pos, alpha=0.5, arrows=G.is_directed(), ax=ax)

        names = {node: data.get(VERTEX_NAMES, str(node))
                 for node, data in G.nodes(data=True)}
        nx.draw_networkx_labels(G, pos, labels=names, font_size=9, ax=ax)

        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.axis('off')

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, format=self.format, bbox_inches='tight')
            logger.info(f"Saved network plot to {save_path}")

        return fig
