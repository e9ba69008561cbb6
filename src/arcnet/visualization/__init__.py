"""Visualization package for arc diagrams."""

from .arc_plots import ArcDiagramVisualizer, arc_layout

__all__ = ['ArcDiagramVisualizer', 'arc_layout']
