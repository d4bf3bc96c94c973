"""
Transform: 4x4 homogeneous affine transformation.

Points are transformed with w=1 (translation applies), directions with w=0.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np
from numpy.typing import NDArray

from .vector import Vector


def rotation_matrix(axis: Vector, angle_rad: float) -> NDArray[np.float64]:
    """
    3x3 rotation matrix about an axis through the origin.

    Args:
        axis: Rotation axis (unitized internally)
        angle_rad: Rotation angle in radians (positive = CCW looking down the axis)

    Returns:
        3x3 rotation matrix
    """
    k = axis.unitize().to_array()
    K = np.array([
        [0.0, -k[2], k[1]],
        [k[2], 0.0, -k[0]],
        [-k[1], k[0], 0.0]
    ], dtype=np.float64)
    return np.eye(3) + np.sin(angle_rad) * K + (1.0 - np.cos(angle_rad)) * (K @ K)


def rotation_matrix_xyz(rx: float, ry: float, rz: float) -> NDArray[np.float64]:
    """
    3x3 rotation matrix from Euler angles, applied about x, then y, then z.

    Args:
        rx, ry, rz: Rotation angles about x, y, z axes (radians)

    Returns:
        3x3 rotation matrix (R = Rz * Ry * Rx)
    """
    return (rotation_matrix(Vector.UNIT_Z, rz)
            @ rotation_matrix(Vector.UNIT_Y, ry)
            @ rotation_matrix(Vector.UNIT_X, rx))


@dataclass
class Transform:
    """
    3D affine transformation held as a 4x4 homogeneous matrix.

    Attributes:
        matrix: 4x4 matrix; the upper-left 3x3 block is the linear part and the
            last column holds the translation
    """

    matrix: NDArray[np.float64] = field(default_factory=lambda: np.eye(4, dtype=np.float64))

    def __post_init__(self):
        """Validate transform data."""
        self.matrix = np.asarray(self.matrix, dtype=np.float64)
        if self.matrix.shape != (4, 4):
            raise ValueError(f"matrix must have shape (4, 4), got {self.matrix.shape}")

    @classmethod
    def identity(cls) -> Transform:
        """Create identity transform (no translation/rotation)."""
        return cls(np.eye(4, dtype=np.float64))

    @classmethod
    def from_linear(cls, linear: NDArray[np.float64], translation: Vector = Vector.ZERO) -> Transform:
        """Build from a 3x3 linear part and a translation."""
        mat = np.eye(4, dtype=np.float64)
        mat[:3, :3] = linear
        mat[:3, 3] = translation.to_array()
        return cls(mat)

    @classmethod
    def translation(cls, offset: Vector) -> Transform:
        return cls.from_linear(np.eye(3), offset)

    @classmethod
    def rotation(cls, axis: Vector, angle_rad: float, centre: Vector = Vector.ZERO) -> Transform:
        """Rotation about an axis passing through a centre point."""
        rot = rotation_matrix(axis, angle_rad)
        c = centre.to_array()
        return cls.from_linear(rot, Vector.from_array(c - rot @ c))

    @classmethod
    def scaling(cls, factor: float, centre: Vector = Vector.ZERO) -> Transform:
        """Uniform scaling about a centre point."""
        c = centre.to_array()
        return cls.from_linear(np.eye(3) * factor, Vector.from_array(c - factor * c))

    @classmethod
    def from_2d(cls, tx: float, ty: float, angle_deg: float) -> Transform:
        """
        Create 2D transform (rotation about z-axis then translation).

        Args:
            tx, ty: Translation in x and y
            angle_deg: Rotation angle in degrees (positive = CCW)
        """
        rot = rotation_matrix(Vector.UNIT_Z, np.deg2rad(angle_deg))
        return cls.from_linear(rot, Vector(tx, ty, 0.0))

    @classmethod
    def from_3d(cls, tx: float, ty: float, tz: float,
                rx_deg: float = 0.0, ry_deg: float = 0.0, rz_deg: float = 0.0) -> Transform:
        """
        Create 3D transform with Euler angles (XYZ convention).

        Args:
            tx, ty, tz: Translation
            rx_deg, ry_deg, rz_deg: Rotation angles about x, y, z axes (degrees)
        """
        rot = rotation_matrix_xyz(np.deg2rad(rx_deg), np.deg2rad(ry_deg), np.deg2rad(rz_deg))
        return cls.from_linear(rot, Vector(tx, ty, tz))

    def __matmul__(self, other: Transform) -> Transform:
        """Composition: (a @ b) applies b first, then a."""
        return Transform(self.matrix @ other.matrix)

    def inverse(self) -> Transform:
        return Transform(np.linalg.inv(self.matrix))

    def apply_to_point(self, point: Vector) -> Vector:
        """Transform a position (w = 1)."""
        p = self.matrix @ np.array([point.x, point.y, point.z, 1.0])
        return Vector(float(p[0]), float(p[1]), float(p[2]))

    def apply_to_vector(self, vector: Vector) -> Vector:
        """Transform a direction (w = 0, translation ignored)."""
        v = self.matrix[:3, :3] @ vector.to_array()
        return Vector.from_array(v)

    def apply_to_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Transform an (N, 3) array of positions.

        Args:
            points: Point coordinates (N, 3)

        Returns:
            Transformed points (N, 3)
        """
        return (self.matrix[:3, :3] @ points.T).T + self.matrix[:3, 3]

    def __repr__(self) -> str:
        return f"Transform(\n{self.matrix})"
