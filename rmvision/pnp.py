"""Pose of known object points from their image projections."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import least_squares
from scipy.spatial.transform import Rotation

_NUM_DIST_COEFFS = 5
_UNDISTORT_ITERATIONS = 20
_PLANAR_TOLERANCE = 1e-9


def _camera(camera_matrix: object) -> np.ndarray:
    return np.asarray(camera_matrix, dtype=float).reshape(3, 3)


def _distortion(dist_coeffs: object) -> np.ndarray:
    coeffs = np.zeros(_NUM_DIST_COEFFS)
    if dist_coeffs is not None:
        given = np.asarray(dist_coeffs, dtype=float).reshape(-1)[:_NUM_DIST_COEFFS]
        coeffs[: given.size] = given
    return coeffs


def _rotation(rvec: object) -> np.ndarray:
    return Rotation.from_rotvec(np.asarray(rvec, dtype=float).reshape(3)).as_matrix()


def project_points(
    object_points: object,
    rvec: object,
    tvec: object,
    camera_matrix: object,
    dist_coeffs: object = None,
) -> np.ndarray:
    """Project 3-D points into the image; ``dist_coeffs`` is ``(k1, k2, p1, p2, k3)``."""
    points = np.asarray(object_points, dtype=float).reshape(-1, 3)
    cam = points @ _rotation(rvec).T + np.asarray(tvec, dtype=float).reshape(3)
    x = cam[:, 0] / cam[:, 2]
    y = cam[:, 1] / cam[:, 2]
    k1, k2, p1, p2, k3 = _distortion(dist_coeffs)
    r2 = x * x + y * y
    radial = 1 + k1 * r2 + k2 * r2 * r2 + k3 * r2 * r2 * r2
    xd = x * radial + 2 * p1 * x * y + p2 * (r2 + 2 * x * x)
    yd = y * radial + p1 * (r2 + 2 * y * y) + 2 * p2 * x * y
    k = _camera(camera_matrix)
    u = k[0, 0] * xd + k[0, 1] * yd + k[0, 2]
    v = k[1, 1] * yd + k[1, 2]
    return np.column_stack([u, v])


def _undistort(image_points: np.ndarray, k: np.ndarray, dist: np.ndarray) -> np.ndarray:
    y0 = (image_points[:, 1] - k[1, 2]) / k[1, 1]
    x0 = (image_points[:, 0] - k[0, 2] - k[0, 1] * y0) / k[0, 0]
    k1, k2, p1, p2, k3 = dist
    x, y = x0.copy(), y0.copy()
    for _ in range(_UNDISTORT_ITERATIONS):
        r2 = x * x + y * y
        radial = 1 + k1 * r2 + k2 * r2 * r2 + k3 * r2 * r2 * r2
        dx = 2 * p1 * x * y + p2 * (r2 + 2 * x * x)
        dy = p1 * (r2 + 2 * y * y) + 2 * p2 * x * y
        x = (x0 - dx) / radial
        y = (y0 - dy) / radial
    return np.column_stack([x, y])


def _orthonormalize(m: np.ndarray) -> np.ndarray:
    u, _, vt = np.linalg.svd(m)
    r = u @ vt
    if np.linalg.det(r) < 0:
        u[:, -1] *= -1
        r = u @ vt
    return r


def _pose_from_homography(plane: np.ndarray, normalized: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    rows = []
    for (a, b), (x, y) in zip(plane, normalized):
        rows.append([a, b, 1, 0, 0, 0, -x * a, -x * b, -x])
        rows.append([0, 0, 0, a, b, 1, -y * a, -y * b, -y])
    h = np.linalg.svd(np.asarray(rows))[2][-1].reshape(3, 3)
    scale = 2.0 / (np.linalg.norm(h[:, 0]) + np.linalg.norm(h[:, 1]))
    if scale * h[2, 2] < 0:
        scale = -scale
    r1, r2 = scale * h[:, 0], scale * h[:, 1]
    rotation = _orthonormalize(np.column_stack([r1, r2, np.cross(r1, r2)]))
    return rotation, scale * h[:, 2]


def _pose_from_dlt(points: np.ndarray, normalized: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    rows = []
    for (px, py, pz), (x, y) in zip(points, normalized):
        rows.append([px, py, pz, 1, 0, 0, 0, 0, -x * px, -x * py, -x * pz, -x])
        rows.append([0, 0, 0, 0, px, py, pz, 1, -y * px, -y * py, -y * pz, -y])
    p = np.linalg.svd(np.asarray(rows))[2][-1].reshape(3, 4)
    if np.linalg.det(p[:, :3]) < 0:
        p = -p
    scale = np.linalg.svd(p[:, :3], compute_uv=False).mean()
    return _orthonormalize(p[:, :3]), p[:, 3] / scale


def _initial_poses(points: np.ndarray, normalized: np.ndarray) -> list[tuple[np.ndarray, np.ndarray]]:
    centroid = points.mean(axis=0)
    centered = points - centroid
    _, spread, vt = np.linalg.svd(centered)
    planar = spread[2] <= _PLANAR_TOLERANCE * max(spread[0], 1.0)
    if not planar and len(points) >= 6:
        return [_pose_from_dlt(points, normalized)]
    basis = np.vstack([vt[0], vt[1], np.cross(vt[0], vt[1])])
    plane_rot, center = _pose_from_homography(centered @ basis[:2].T, normalized)
    rotation = plane_rot @ basis
    poses = [(rotation, center - rotation @ centroid)]
    # The mirror pose of a plane: rotate by pi about the line of sight to its centre.
    view = center / np.linalg.norm(center)
    mirrored = Rotation.from_rotvec(math.pi * view).as_matrix() @ rotation
    poses.append((mirrored, center - mirrored @ centroid))
    return poses


class PnPSolver:
    """Recover object poses from image points for named sets of object points."""

    def __init__(self, camera_matrix: Sequence[float], distortion_coefficients: Sequence[float]) -> None:
        self.camera_matrix = _camera(camera_matrix)
        coeffs = np.asarray(distortion_coefficients, dtype=float).reshape(-1)
        if coeffs.size < _NUM_DIST_COEFFS:
            raise ValueError(f"expected {_NUM_DIST_COEFFS} distortion coefficients, got {coeffs.size}")
        self.distortion_coefficients = coeffs[:_NUM_DIST_COEFFS].copy()
        self._object_points: dict[str, np.ndarray] = {}

    def set_object_points(self, frame: str, points: object) -> None:
        """Register the 3-D points of the coordinate frame called ``frame``."""
        self._object_points[frame] = np.asarray(points, dtype=float).reshape(-1, 3)

    def _refine(self, points: np.ndarray, image: np.ndarray, rotation: np.ndarray, translation: np.ndarray):
        def residual(params: np.ndarray) -> np.ndarray:
            projected = project_points(
                points, params[:3], params[3:], self.camera_matrix, self.distortion_coefficients
            )
            return (projected - image).ravel()

        start = np.concatenate([Rotation.from_matrix(rotation).as_rotvec(), translation])
        result = least_squares(residual, start, method="lm")
        rvec, tvec = result.x[:3], result.x[3:]
        if not np.all(np.isfinite(result.x)):
            return None
        depths = (points @ _rotation(rvec).T + tvec)[:, 2]
        if np.any(depths <= 0):
            return None
        return rvec, tvec, float(np.linalg.norm(result.fun))

    def solve_pnp_generic(self, image_points: object, frame: str) -> list[tuple[np.ndarray, np.ndarray]]:
        """Return every pose ``(rvec, tvec)`` found, best fit first; empty for an unknown frame."""
        points = self._object_points.get(frame)
        if points is None:
            return []
        image = np.asarray(image_points, dtype=float).reshape(-1, 2)
        if len(image) != len(points):
            raise ValueError("image and object point counts differ")
        if len(points) < 4:
            raise ValueError("at least 4 points are needed")
        normalized = _undistort(image, self.camera_matrix, self.distortion_coefficients)
        refined = [
            solution
            for rotation, translation in _initial_poses(points, normalized)
            if (solution := self._refine(points, image, rotation, translation)) is not None
        ]
        refined.sort(key=lambda solution: solution[2])
        unique: list[tuple[np.ndarray, np.ndarray]] = []
        for rvec, tvec, _ in refined:
            if not any(
                np.allclose(_rotation(rvec), _rotation(r), atol=1e-6) and np.allclose(tvec, t, atol=1e-6)
                for r, t in unique
            ):
                unique.append((rvec, tvec))
        return unique

    def solve_pnp(self, image_points: object, frame: str) -> tuple[np.ndarray, np.ndarray] | None:
        """Return the best pose ``(rvec, tvec)``, or ``None`` if there is none."""
        solutions = self.solve_pnp_generic(image_points, frame)
        return solutions[0] if solutions else None

    def distance_to_center(self, image_point: Sequence[float]) -> float:
        """Pixel distance from ``image_point`` to the principal point."""
        cx, cy = self.camera_matrix[0, 2], self.camera_matrix[1, 2]
        return float(math.hypot(image_point[0] - cx, image_point[1] - cy))

    def reprojection_error(self, image_points: object, rvec: object, tvec: object, frame: str) -> float:
        """Sum of pixel distances between ``image_points`` and the reprojected frame points."""
        points = self._object_points.get(frame)
        if points is None:
            return 0.0
        reprojected = project_points(points, rvec, tvec, self.camera_matrix, self.distortion_coefficients)
        image = np.asarray(image_points, dtype=float).reshape(-1, 2)
        return float(sum(np.linalg.norm(a - b) for a, b in zip(image, reprojected)))