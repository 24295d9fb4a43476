r"""Backoff strategy used to compute retry delays."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aretry.backoff.exponential import ExponentialBackoff
