"""Extended Kalman filter whose Jacobians come from numerical differentiation."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

Vector = np.ndarray
Matrix = np.ndarray


def numerical_jacobian(
    func: Callable[[Vector], object], x: object, eps: float = 1e-6
) -> Matrix:
    """Central-difference Jacobian of ``func`` at ``x``, shaped ``(len(func(x)), len(x))``."""
    x = np.asarray(x, dtype=float).reshape(-1)
    columns = []
    for step in np.eye(x.size) * eps:
        forward = np.asarray(func(x + step), dtype=float).reshape(-1)
        backward = np.asarray(func(x - step), dtype=float).reshape(-1)
        columns.append((forward - backward) / (2.0 * eps))
    return np.column_stack(columns)


class ExtendedKalmanFilter:
    """Extended Kalman filter for a nonlinear process ``f`` and measurement ``h``.

    ``update_q()`` returns the process noise covariance and ``update_r(z)``
    the measurement noise covariance for measurement ``z``.
    """

    def __init__(
        self,
        f: Callable[[Vector], object],
        h: Callable[[Vector], object],
        update_q: Callable[[], object],
        update_r: Callable[[Vector], object],
        p0: object,
    ) -> None:
        self._f = f
        self._h = h
        self._update_q = update_q
        self._update_r = update_r
        self._p_post = np.asarray(p0, dtype=float)
        n = self._p_post.shape[0]
        if self._p_post.shape != (n, n):
            raise ValueError("initial covariance must be a square matrix")
        self._x_post: Vector | None = None
        self._x_pri: Vector | None = None
        self._p_pri: Matrix | None = None

    @property
    def state(self) -> Vector:
        """The posterior state estimate."""
        if self._x_post is None:
            raise RuntimeError("state has not been set")
        return self._x_post.copy()

    @property
    def covariance(self) -> Matrix:
        """The posterior error covariance."""
        return self._p_post.copy()

    def set_state(self, x0: object) -> None:
        """Set the current state estimate."""
        x0 = np.asarray(x0, dtype=float).reshape(-1)
        if x0.size != self._p_post.shape[0]:
            raise ValueError("state size does not match covariance")
        self._x_post = x0

    def set_predict_func(self, f: Callable[[Vector], object]) -> None:
        """Replace the process function."""
        self._f = f

    def set_measure_func(self, h: Callable[[Vector], object]) -> None:
        """Replace the measurement function."""
        self._h = h

    def predict(self) -> Vector:
        """Propagate the state through the process model; return the prior state."""
        if self._x_post is None:
            raise RuntimeError("set_state() must be called before predict()")
        x_pri = np.asarray(self._f(self._x_post), dtype=float).reshape(-1)
        jac_f = numerical_jacobian(self._f, self._x_post)
        q = np.asarray(self._update_q(), dtype=float)
        self._p_pri = jac_f @ self._p_post @ jac_f.T + q
        self._x_pri = x_pri
        self._x_post = x_pri.copy()
        return x_pri.copy()

    def update(self, z: object) -> Vector:
        """Correct the prior with measurement ``z``; return the posterior state."""
        if self._x_pri is None or self._p_pri is None or self._x_post is None:
            raise RuntimeError("predict() must be called before update()")
        z = np.asarray(z, dtype=float).reshape(-1)
        z_pri = np.asarray(self._h(self._x_pri), dtype=float).reshape(-1)
        jac_h = numerical_jacobian(self._h, self._x_pri)
        r = np.asarray(self._update_r(z), dtype=float)
        innovation_cov = jac_h @ self._p_pri @ jac_h.T + r
        gain = np.linalg.solve(innovation_cov.T, (self._p_pri @ jac_h.T).T).T
        self._x_post = self._x_post + gain @ (z - z_pri)
        identity = np.eye(self._p_pri.shape[0])
        self._p_post = (identity - gain @ jac_h) @ self._p_pri
        return self._x_post.copy()