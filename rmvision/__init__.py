"""Aiming utilities: filters, trajectory and manual compensation, PnP, rotations and heartbeats."""

__version__ = "0.1.0"