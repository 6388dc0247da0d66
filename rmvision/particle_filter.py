"""Particle filter with Gaussian likelihoods and adaptive resampling."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

Vector = np.ndarray
Matrix = np.ndarray


def gaussian_likelihood(x: object, mean: object, cov: object) -> float:
    """Density of ``x`` under a normal distribution with ``mean`` and ``cov``."""
    x = np.asarray(x, dtype=float).reshape(-1)
    mean = np.asarray(mean, dtype=float).reshape(-1)
    cov = np.asarray(cov, dtype=float)
    diff = x - mean
    exponent = -0.5 * diff @ np.linalg.solve(cov, diff)
    norm = math.sqrt((2 * math.pi) ** x.size * np.linalg.det(cov))
    return float(math.exp(exponent) / norm)


class ParticleFilter:
    """Estimate a state from noisy measurements with a cloud of particles.

    Noise is drawn independently per dimension, using the diagonal of the
    process covariance returned by ``update_q()`` as the standard deviation.
    """

    def __init__(
        self,
        f: Callable[[Vector], object],
        h: Callable[[Vector], object],
        update_q: Callable[[], object],
        update_r: Callable[[Vector], object],
        num_particles: int,
        rng: np.random.Generator | int | None = None,
    ) -> None:
        if num_particles <= 0:
            raise ValueError("num_particles must be positive")
        self._f = f
        self._h = h
        self._update_q = update_q
        self._update_r = update_r
        self.num_particles = num_particles
        self._rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self._particles: Matrix | None = None
        self._weights = np.zeros(num_particles)

    @property
    def particles(self) -> Matrix:
        """Particles as columns of a ``(state_dim, num_particles)`` array."""
        return self._require_particles().copy()

    @property
    def weights(self) -> Vector:
        """Current particle weights."""
        return self._weights.copy()

    def _require_particles(self) -> Matrix:
        if self._particles is None:
            raise RuntimeError("init_state() must be called first")
        return self._particles

    def _noise(self, cov: object, dims: int) -> Matrix:
        std = np.diag(np.asarray(cov, dtype=float))[:dims]
        return self._rng.normal(0.0, std[:, None], size=(dims, self.num_particles))

    def init_state(self, x0: object) -> None:
        """Scatter the particles around ``x0`` and give them equal weight."""
        x0 = np.asarray(x0, dtype=float).reshape(-1)
        noise = self._noise(self._update_q(), x0.size)
        self._particles = x0[:, None] + noise
        self._weights = np.full(self.num_particles, 1.0 / self.num_particles)

    def set_dim(self, dim: int, val: float) -> None:
        """Redraw one state component of every particle around ``val``."""
        particles = self._require_particles()
        std = float(np.asarray(self._update_q(), dtype=float)[dim, dim])
        particles[dim, :] = self._rng.normal(val, std, size=self.num_particles)

    def predict(self) -> Vector:
        """Move every particle through the process model; return the weighted mean."""
        particles = self._require_particles()
        self._particles = np.column_stack(
            [np.asarray(self._f(p), dtype=float).reshape(-1) for p in particles.T]
        )
        return self._particles @ self._weights

    def update(self, z: object) -> Vector:
        """Reweight by measurement ``z``; return the weighted mean before any resampling."""
        particles = self._require_particles()
        z = np.asarray(z, dtype=float).reshape(-1)
        cov = self._update_r(z)
        likelihoods = np.array(
            [gaussian_likelihood(z, self._h(p), cov) for p in particles.T]
        )
        weights = likelihoods * self._weights
        total = weights.sum()
        if not np.isfinite(total) or total <= 0.0:
            raise FloatingPointError("all particle weights vanished")
        self._weights = weights / total
        estimate = particles @ self._weights
        effective = 1.0 / float(self._weights @ self._weights)
        if effective < self.num_particles * 0.5:
            self._resample()
        return estimate

    def _resample(self) -> None:
        particles = self._require_particles()
        noise = self._noise(self._update_q(), particles.shape[0])
        chosen = self._rng.choice(self.num_particles, size=self.num_particles, p=self._weights)
        new_particles = particles[:, chosen]
        # Only repeated draws get noise, so the first copy of a good particle survives intact.
        _, first = np.unique(chosen, return_index=True)
        repeated = np.ones(self.num_particles, dtype=bool)
        repeated[first] = False
        new_particles[:, repeated] += noise[:, repeated]
        self._particles = new_particles
        self._weights = np.full(self.num_particles, 1.0 / self.num_particles)