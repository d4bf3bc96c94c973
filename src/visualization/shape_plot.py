"""
Matplotlib-based plan view of shapes and models.
"""

from typing import Optional, Tuple
import logging
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from nucleus.geometry import Angle, Curve, PlanarRegion, Point, Shape
from nucleus.model import LinearElement, Model, PanelElement

logger = logging.getLogger(__name__)


class ShapePlotter:
    """
    2D (XY) plot of kernel geometry using matplotlib.
    """

    def __init__(self, figsize: Tuple[float, float] = (10, 8),
                 facet_angle: float = Angle.from_degrees(5)):
        """
        Initialize plotter.

        Args:
            figsize: Figure size (width, height) in inches
            facet_angle: Maximum turn per facet when drawing curved segments
        """
        self.figsize = figsize
        self.facet_angle = facet_angle
        self.fig = None
        self.ax = None

    def _setup_figure(self, title: str = ""):
        """Create figure and axis."""
        self.fig, self.ax = plt.subplots(figsize=self.figsize)
        self.ax.set_aspect('equal')
        self.ax.grid(True, alpha=0.3, linestyle='--')
        self.ax.set_xlabel('X')
        self.ax.set_ylabel('Y')
        if title:
            self.ax.set_title(title, fontsize=14, fontweight='bold')

    def _ensure_figure(self, title: str = ""):
        if self.ax is None:
            self._setup_figure(title)

    def _facet_array(self, curve: Curve) -> np.ndarray:
        points = curve.facet(self.facet_angle)
        if not points:
            return np.zeros((0, 3))
        return np.array([p.to_array() for p in points])

    def plot_curve(self, curve: Curve, color: str = 'black', linewidth: float = 2.0,
                   show_vertices: bool = False, label: Optional[str] = None,
                   title: str = "") -> plt.Figure:
        """
        Plot a curve, faceted into straight segments.

        Args:
            curve: Curve to plot
            color: Line color
            linewidth: Line width
            show_vertices: Draw the curve's vertices
            label: Legend label
            title: Plot title (used if a new figure is created)

        Returns:
            Matplotlib figure
        """
        self._ensure_figure(title)
        pts = self._facet_array(curve)
        if len(pts):
            self.ax.plot(pts[:, 0], pts[:, 1], color=color, linewidth=linewidth, label=label)
        if show_vertices:
            verts = curve.vertices.to_array()
            self.ax.plot(verts[:, 0], verts[:, 1], 'o', color=color, markersize=4)
        return self.fig

    def plot_region(self, region: PlanarRegion, facecolor: str = 'lightsteelblue',
                    edgecolor: str = 'black', alpha: float = 0.6,
                    title: str = "") -> plt.Figure:
        """
        Plot a planar region as a filled patch with its voids cut out.

        Returns:
            Matplotlib figure
        """
        self._ensure_figure(title)
        vertices = []
        codes = []
        for curve in (region.perimeter,) + region.voids:
            pts = self._facet_array(curve)
            if len(pts) < 3:
                continue
            vertices.extend(pts[:, :2].tolist())
            codes.extend([MplPath.MOVETO] + [MplPath.LINETO] * (len(pts) - 1))
        if vertices:
            patch = PathPatch(MplPath(vertices, codes), facecolor=facecolor,
                              edgecolor=edgecolor, alpha=alpha)
            self.ax.add_patch(patch)
            centroid = region.centroid()
            self.ax.plot(centroid.x, centroid.y, 'r+', markersize=10, markeredgewidth=2)
            self._auto_scale_axis(np.array(vertices), padding=0.5)
        return self.fig

    def plot_shape(self, shape: Shape, **kwargs) -> plt.Figure:
        """Plot any supported shape (dispatches on type)."""
        if isinstance(shape, PlanarRegion):
            return self.plot_region(shape, **kwargs)
        if isinstance(shape, Curve):
            return self.plot_curve(shape, **kwargs)
        if isinstance(shape, Point):
            self._ensure_figure()
            self.ax.plot(shape.position.x, shape.position.y, 'ko', markersize=5)
            return self.fig
        raise TypeError(f"Cannot plot {type(shape).__name__}")

    def plot_model(self, model: Model, show_nodes: bool = True,
                   show_labels: bool = False, show_bounding_box: bool = True,
                   title: Optional[str] = None) -> plt.Figure:
        """
        Plot every undeleted element of a model.

        Linear elements are colored by family; panels are drawn as filled regions.

        Args:
            model: Model to plot
            show_nodes: Draw node markers
            show_labels: Label elements at their nominal position
            show_bounding_box: Draw the model's bounding box
            title: Plot title (default: model name)

        Returns:
            Matplotlib figure
        """
        if title is None:
            title = f"Model: {model.name}"
        self._setup_figure(title)

        families = [f for f in model.families.undeleted()]
        colors = plt.cm.tab10(np.linspace(0, 1, max(len(families), 1)))
        color_map = {f.guid: colors[i] for i, f in enumerate(families)}

        for element in model.elements.undeleted():
            if element.geometry is None:
                continue
            if isinstance(element, PanelElement):
                self.plot_region(element.geometry)
            elif isinstance(element, LinearElement):
                color = 'black'
                if element.family is not None:
                    color = color_map.get(element.family.guid, 'black')
                self.plot_curve(element.geometry, color=color)
            if show_labels:
                pos = element.nominal_position()
                self.ax.text(pos.x, pos.y, element.description, fontsize=8,
                             ha='center', va='bottom')

        if show_nodes:
            nodes = model.nodes.undeleted()
            if nodes:
                arr = np.array([n.position.to_array() for n in nodes])
                self.ax.plot(arr[:, 0], arr[:, 1], 'ko', markersize=4, zorder=10, label='Nodes')

        box = model.bounding_box
        if show_bounding_box:
            xs = [box.min_x, box.max_x, box.max_x, box.min_x, box.min_x]
            ys = [box.min_y, box.min_y, box.max_y, box.max_y, box.min_y]
            self.ax.plot(xs, ys, color='gray', linestyle=':', linewidth=1)
        self.ax.set_xlim(box.min_x, box.max_x)
        self.ax.set_ylim(box.min_y, box.max_y)

        info_text = (
            f"Elements: {len(model.elements.undeleted())}\n"
            f"Nodes: {len(model.nodes.undeleted())}"
        )
        self.ax.text(0.98, 0.02, info_text, transform=self.ax.transAxes,
                     fontsize=9, ha='right', va='bottom',
                     bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.5))
        return self.fig

    def _auto_scale_axis(self, points: np.ndarray, padding: float = 0.5):
        """Auto-scale axis with padding."""
        x_min, x_max = points[:, 0].min(), points[:, 0].max()
        y_min, y_max = points[:, 1].min(), points[:, 1].max()
        self.ax.set_xlim(x_min - padding, x_max + padding)
        self.ax.set_ylim(y_min - padding, y_max + padding)

    def save(self, filepath: str, dpi: int = 300):
        """
        Save figure to file.

        Args:
            filepath: Output file path
            dpi: Resolution (dots per inch)
        """
        if self.fig is None:
            raise ValueError("No figure to save. Call a plot method first.")

        self.fig.savefig(filepath, dpi=dpi, bbox_inches='tight')
        logger.info("Saved figure to %s", filepath)

    def show(self):
        """Display the figure."""
        if self.fig is None:
            raise ValueError("No figure to show. Call a plot method first.")

        plt.show()

    def close(self):
        """Close the figure."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None


def quick_plot_model(model: Model, filepath: Optional[str] = None):
    """Plot a model and save it to filepath, or show it if no path is given."""
    plotter = ShapePlotter()
    plotter.plot_model(model)
    if filepath:
        plotter.save(filepath)
        plotter.close()
    else:
        plotter.show()
