"""
Mesh: vertices connected by triangular and quadrilateral faces.

Face geometry (centres, normals, areas) is computed with NumPy and cached until a
vertex moves.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .shape import Shape
from .vector import Vector
from .vertex import VertexCollection, as_vertex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeshFace:
    """
    Indices of the 3 or 4 mesh vertices bounding a face, anticlockwise about its normal.

    Attributes:
        a, b, c: Corner indices
        d: Fourth corner index for quads, None for triangles
    """
    a: int
    b: int
    c: int
    d: Optional[int] = None

    @property
    def is_quad(self) -> bool:
        return self.d is not None

    def indices(self) -> Tuple[int, ...]:
        if self.d is None:
            return (self.a, self.b, self.c)
        return (self.a, self.b, self.c, self.d)

    def triangles(self) -> List[Tuple[int, int, int]]:
        """Split into triangles (quads along the a-c diagonal)."""
        if self.d is None:
            return [(self.a, self.b, self.c)]
        return [(self.a, self.b, self.c), (self.a, self.c, self.d)]


class Mesh(Shape):
    """
    Polygon mesh with owned vertices.

    Attributes:
        faces: Face connectivity
    """

    def __init__(self, vertices: Iterable = (), faces: Iterable[MeshFace] = ()):
        super().__init__()
        self._vertices = VertexCollection(self, [as_vertex(v) for v in vertices])
        self.faces: List[MeshFace] = []
        self._face_data: Optional[Tuple[NDArray, NDArray, NDArray]] = None
        for face in faces:
            self.add_face(face)

    @classmethod
    def from_arrays(cls, nodes: NDArray[np.float64], faces: Iterable[Iterable[int]]) -> Mesh:
        """
        Build from an (N, 3) node array and per-face index lists.

        Args:
            nodes: Node coordinates (N, 3)
            faces: Each entry holds 3 or 4 node indices
        """
        nodes = np.asarray(nodes, dtype=np.float64)
        if nodes.ndim != 2 or nodes.shape[1] != 3:
            raise ValueError(f"nodes must have shape (N, 3), got {nodes.shape}")
        mesh = cls(Vector.from_array(row) for row in nodes)
        for face in faces:
            mesh.add_face(MeshFace(*face))
        return mesh

    @property
    def vertices(self) -> VertexCollection:
        return self._vertices

    @property
    def num_nodes(self) -> int:
        return len(self._vertices)

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    def is_valid(self) -> bool:
        return (len(self._vertices) >= 3 and bool(self.faces)
                and all(v.position.is_valid() for v in self._vertices))

    def add_vertex(self, position) -> int:
        """Add a vertex and return its index."""
        self._vertices.append(as_vertex(position))
        return len(self._vertices) - 1

    def add_face(self, face: MeshFace) -> None:
        """Add a face, checking that it references existing vertices."""
        max_idx = max(face.indices())
        if max_idx >= len(self._vertices) or min(face.indices()) < 0:
            raise ValueError(
                f"Face references vertex index {max_idx} but only "
                f"{len(self._vertices)} vertices exist"
            )
        self.faces.append(face)
        self.notify_geometry_updated()

    def invalidate_cached_geometry(self) -> None:
        super().invalidate_cached_geometry()
        self._face_data = None

    def _compute_face_geometry(self) -> Tuple[NDArray, NDArray, NDArray]:
        """Face centres (F, 3), unit normals (F, 3) and areas (F,)."""
        nodes = self._vertices.to_array()
        num_faces = len(self.faces)
        centres = np.zeros((num_faces, 3), dtype=np.float64)
        normals = np.zeros((num_faces, 3), dtype=np.float64)
        areas = np.zeros(num_faces, dtype=np.float64)
        for i, face in enumerate(self.faces):
            corners = nodes[list(face.indices())]
            centres[i] = corners.mean(axis=0)
            # Sum of triangle cross products: twice the vector area
            vector_area = np.zeros(3)
            for a, b, c in face.triangles():
                vector_area += np.cross(nodes[b] - nodes[a], nodes[c] - nodes[a])
            magnitude = np.linalg.norm(vector_area)
            areas[i] = 0.5 * magnitude
            if magnitude > 0:
                normals[i] = vector_area / magnitude
            else:
                logger.debug("Mesh face %d is degenerate", i)
                normals[i] = np.nan
        return centres, normals, areas

    def _face_geometry(self) -> Tuple[NDArray, NDArray, NDArray]:
        if self._face_data is None:
            self._face_data = self._compute_face_geometry()
        return self._face_data

    def face_centres(self) -> NDArray[np.float64]:
        return self._face_geometry()[0]

    def face_normals(self) -> NDArray[np.float64]:
        return self._face_geometry()[1]

    def face_areas(self) -> NDArray[np.float64]:
        return self._face_geometry()[2]

    def area(self) -> float:
        """Total surface area of all faces."""
        return float(self.face_areas().sum())

    def to_arrays(self) -> Tuple[NDArray[np.float64], List[Tuple[int, ...]]]:
        """Node coordinates (N, 3) and face index tuples."""
        return self._vertices.to_array(), [f.indices() for f in self.faces]

    def __repr__(self) -> str:
        return f"Mesh(nodes={self.num_nodes}, faces={self.num_faces})"
