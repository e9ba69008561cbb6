"""
Main pipeline for arc diagram workflows
Adjacency matrix -> network -> edge list -> labels -> arc diagram
"""

import argparse
import time
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Optional

from .utils import (
    load_config, setup_logging, create_output_directory,
    save_results, validate_config, format_time
)
from .matrix_generation import MatrixGenerator
from .graph_analysis import (
    NetworkBuilder, NetworkAnalyzer, vertex_attribute, as_edgelist,
    select_labels, edgelist_to_frame, order_by_community, degree_sizes
)
from .adapters import to_igraph, get_edgelist
from .visualization import ArcDiagramVisualizer


class ArcDiagramPipeline:
    """Complete workflow from adjacency matrix to arc diagram."""

    def __init__(self, config_path=None, config: Optional[dict] = None,
                 output_dir: Optional[str] = None):
        """Initialize pipeline with configuration."""
        self.config = config if config is not None else load_config(config_path)
        validate_config(self.config)

        self.logger = setup_logging(self.config)
        self.logger.info("=" * 60)
        self.logger.info("Arc Diagram Pipeline Initialized")
        self.logger.info("=" * 60)

        base_dir = output_dir or self.config['output']['base_dir']
        self.output_dir = create_output_directory(base_dir)
        self.logger.info(f"Output directory: {self.output_dir}")

        self.matrix_generator = MatrixGenerator(self.config)
        self.network_builder = NetworkBuilder(self.config)
        self.network_analyzer = NetworkAnalyzer(self.config)
        self.visualizer = ArcDiagramVisualizer(self.config)

        self.results = {}

    def run(self, matrix: Optional[np.ndarray] = None, make_plots: bool = True) -> dict:
        """
        Run the workflow once.

        Parameters
        ----------
        matrix : np.ndarray, optional
            Adjacency matrix; a random one is generated when omitted
        make_plots : bool
            Whether to render and save figures

        Returns
        -------
        results : dict
            Edge list, labels and network metrics
        """
        start_time = time.time()
        arc_config = self.config['arcplot']

        try:
            self.logger.info("Step 1/5: Preparing adjacency matrix...")
            if matrix is None:
                matrix_path = self.config['matrix'].get('path')
                if matrix_path:
                    matrix = self.matrix_generator.load_matrix(matrix_path)
                else:
                    matrix = self.matrix_generator.generate()
            vertex_names = self.matrix_generator.vertex_names(matrix.shape[0])

            self.logger.info("Step 2/5: Constructing network...")
            G = self.network_builder.construct_network(matrix, vertex_names)

            self.logger.info("Step 3/5: Extracting edge list...")
            edgelist = as_edgelist(G)

            # The same edges, read through igraph with qualified calls
            mirrored = get_edgelist(to_igraph(G))
            if not np.array_equal(mirrored.pairs, edgelist.pairs):
                raise RuntimeError("networkx and igraph edge lists disagree")

            self.logger.info("Step 4/5: Resolving vertex labels...")
            names = vertex_attribute(G)
            labels = select_labels(names, edgelist)
            n_isolated = len(names) - len(labels)
            if n_isolated:
                self.logger.info(f"{n_isolated} isolated vertices left out of the edge list; "
                                 f"using {len(labels)} of {len(names)} names as labels")

            self.logger.info("Step 5/5: Computing network metrics...")
            global_metrics = self.network_analyzer.extract_global_metrics(G)
            communities = self.network_analyzer.detect_communities(
                G, algorithm=arc_config.get('community_algorithm', 'louvain'))
            global_metrics['modularity'] = self.network_analyzer.modularity(G, communities)

            self.results = {
                'n_vertices': len(names),
                'n_edges': len(edgelist),
                'labels': labels,
                'isolates': [names[i] for i in edgelist.isolates()],
                'global_metrics': global_metrics,
                'communities': {names[node]: c for node, c in communities.items()}
            }

            frame = edgelist_to_frame(edgelist, names)
            csv_path = self.output_dir / 'tables' / 'edgelist.csv'
            frame.to_csv(csv_path, index=False)
            self.logger.info(f"Saved edge list to {csv_path}")

            matrix_path = save_results(matrix, 'adjacency.npy',
                                       self.output_dir / 'reports', format='npy')
            self.logger.info(f"Saved adjacency matrix to {matrix_path}")

            if make_plots:
                self._plot(matrix, G, edgelist, labels, communities)

            elapsed = time.time() - start_time
            self.results['analysis_time'] = elapsed
            save_results(self.results, 'summary.json', self.output_dir / 'reports')
            self.logger.info(f"Workflow finished in {format_time(elapsed)}")

            return self.results

        except Exception as e:
            self.logger.error(f"Arc diagram workflow failed: {str(e)}")
            raise

    def _plot(self, matrix, G, edgelist, labels, communities):
        """Render the matrix, network and arc diagram figures."""
        arc_config = self.config['arcplot']
        fig_dir = self.output_dir / 'figures'
        ext = self.visualizer.format
        names = vertex_attribute(G)
        nodes = [int(node) for node in edgelist.referenced()]

        fig = self.visualizer.plot_adjacency_matrix(
            matrix, names, save_path=fig_dir / f'adjacency.{ext}')
        plt.close(fig)

        fig = self.visualizer.plot_network(
            G, title="Network", communities=communities,
            save_path=fig_dir / f'network.{ext}')
        plt.close(fig)

        node_sizes = None
        if arc_config.get('scale_nodes_by_degree', True):
            node_sizes = degree_sizes(G, nodes, base=arc_config['node_size'])

        node_colors = None
        ordering = None
        if arc_config.get('color_by_community', False):
            palette = sns.color_palette('tab10')
            node_colors = [palette[communities[node] % len(palette)] for node in nodes]
            ordering = order_by_community(nodes, communities)

        fig = self.visualizer.plot_arcs(
            edgelist,
            labels=labels,
            ordering=ordering,
            node_sizes=node_sizes,
            node_colors=node_colors,
            title="Arc Diagram",
            save_path=fig_dir / f'arcdiagram.{ext}')
        plt.close(fig)


def main(argv=None):
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Render an arc diagram from an adjacency matrix")
    parser.add_argument('--config', default=None, help="YAML configuration file")
    parser.add_argument('--output-dir', default=None, help="Base directory for outputs")
    parser.add_argument('--no-plots', action='store_true', help="Skip figure rendering")
    args = parser.parse_args(argv)

    pipeline = ArcDiagramPipeline(config_path=args.config, output_dir=args.output_dir)
    results = pipeline.run(make_plots=not args.no_plots)

    print(f"\n{'='*60}")
    print(f"Edges: {results['n_edges']}, labels: {len(results['labels'])} "
          f"of {results['n_vertices']} vertices")
    print(f"Results: {pipeline.output_dir}")
    print(f"{'='*60}\n")

    return 0


if __name__ == '__main__':
    main()
