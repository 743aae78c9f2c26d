"""Shared helpers for deterministic NumPy random number generation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

import numpy as np

__all__ = [
    "current_numpy_seed",
    "rng_for",
    "seed_numpy_rng",
    "stable_key",
]

_DIGEST_BYTES = 8


@dataclass(slots=True)
class _NumpyRngState:
    """State container for the configured seed."""

    seed: int | None = None


_STATE = _NumpyRngState()


def seed_numpy_rng(seed: int) -> None:
    """
    Set the process-wide default seed.

    It is the base entropy for :func:`rng_for` calls that do not pass
    their own ``seed``.
    """
    _STATE.seed = seed


def current_numpy_seed() -> int | None:
    """Expose the last configured NumPy seed for observability/testing."""
    return _STATE.seed


def stable_key(text: str) -> int:
    """
    Return a process-independent 64-bit integer for ``text``.

    Python's ``hash`` is salted per interpreter, which would re-roll
    every placement on restart.
    """
    digest = hashlib.blake2b(
        text.encode("utf-8"), digest_size=_DIGEST_BYTES,
    ).digest()
    return int.from_bytes(digest, "big")


def rng_for(
    key: str,
    *,
    salt: str = "",
    generation: int = 0,
    seed: int | None = None,
) -> np.random.Generator:
    """
    Build a Generator keyed by an image id.

    The same (key, salt, generation, seed) always yields the same
    stream. ``generation`` is bumped by explicit regenerate or shuffle
    actions. Without an explicit ``seed`` the global one is used.
    """
    if seed is None:
        seed = current_numpy_seed()
    base_seed = seed if seed is not None else 0
    entropy = [base_seed, stable_key(salt), stable_key(key), generation]
    return np.random.default_rng(np.random.SeedSequence(entropy))
