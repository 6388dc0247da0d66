"""Conversions between Euler angles and 3x3 rotation matrices."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

import numpy as np


class EulerOrder(Enum):
    """Axis order for Euler angle conversions."""

    XYZ = "XYZ"
    XZY = "XZY"
    YXZ = "YXZ"
    YZX = "YZX"
    ZXY = "ZXY"
    ZYX = "ZYX"


def _axis_matrix(axis: int, angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    if axis == 0:
        return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])
    if axis == 1:
        return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def euler_to_matrix(
    euler: Sequence[float], order: EulerOrder | str = EulerOrder.XYZ
) -> np.ndarray:
    """Build a rotation from ``(roll, pitch, yaw)`` about X, Y and Z.

    ``order`` gives the sequence in which the rotations are applied;
    ``XYZ`` applies roll first, so the matrix is ``Rz @ Ry @ Rx``.
    """
    order = EulerOrder(order)
    r = _axis_matrix(0, float(euler[0]))
    p = _axis_matrix(1, float(euler[1]))
    y = _axis_matrix(2, float(euler[2]))
    products = {
        EulerOrder.XYZ: (y, p, r),
        EulerOrder.XZY: (p, y, r),
        EulerOrder.YXZ: (y, r, p),
        EulerOrder.YZX: (r, y, p),
        EulerOrder.ZXY: (p, r, y),
        EulerOrder.ZYX: (r, p, y),
    }
    a, b, c = products[order]
    return a @ b @ c


_AXES = {
    EulerOrder.XYZ: (0, 1, 2),
    EulerOrder.XZY: (0, 2, 1),
    EulerOrder.YXZ: (1, 0, 2),
    EulerOrder.YZX: (1, 2, 0),
    EulerOrder.ZXY: (2, 0, 1),
    EulerOrder.ZYX: (2, 1, 0),
}


def _euler_angles(m: np.ndarray, a0: int, a1: int, a2: int) -> np.ndarray:
    # Angles (a, b, c) such that m == R_a0(a) @ R_a1(b) @ R_a2(c), a in [0, pi].
    odd = 0 if (a0 + 1) % 3 == a1 else 1
    i = a0
    j = (a0 + 1 + odd) % 3
    k = (a0 + 2 - odd) % 3
    res0 = math.atan2(m[j, k], m[k, k])
    c2 = math.hypot(m[i, i], m[i, j])
    if (odd and res0 < 0) or (not odd and res0 > 0):
        res0 = res0 - math.pi if res0 > 0 else res0 + math.pi
        res1 = math.atan2(-m[i, k], -c2)
    else:
        res1 = math.atan2(-m[i, k], c2)
    s1, c1 = math.sin(res0), math.cos(res0)
    res2 = math.atan2(s1 * m[k, i] - c1 * m[j, i], c1 * m[j, j] - s1 * m[k, j])
    res = np.array([res0, res1, res2])
    return res if odd else -res


def matrix_to_euler(
    matrix: np.ndarray, order: EulerOrder | str = EulerOrder.XYZ
) -> np.ndarray:
    """Decompose ``matrix`` into three angles about the axes named by ``order``.

    The result ``(a, b, c)`` satisfies ``matrix == R_first(a) @ R_second(b) @ R_third(c)``,
    with the first angle in ``[0, pi]``.
    """
    m = np.asarray(matrix, dtype=float)
    return _euler_angles(m, *_AXES[EulerOrder(order)])


def get_rpy(matrix: np.ndarray) -> np.ndarray:
    """Extract ``(roll, pitch, yaw)`` from a rotation matrix."""
    m = np.asarray(matrix, dtype=float)
    yaw = math.atan2(m[0, 1], m[0, 0])
    c2 = math.hypot(m[2, 2], m[1, 2])
    pitch = math.atan2(-m[0, 2], c2)
    s1, c1 = math.sin(yaw), math.cos(yaw)
    roll = math.atan2(s1 * m[2, 0] - c1 * m[2, 1], c1 * m[1, 1] - s1 * m[1, 0])
    return -np.array([roll, pitch, yaw])