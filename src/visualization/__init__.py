"""Visualization module for kernel geometry and models."""

from .shape_plot import ShapePlotter, quick_plot_model

__all__ = [
    'ShapePlotter',
    'quick_plot_model',
]
