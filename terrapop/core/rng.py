# terrapop/core/rng.py
"""
Seedable random source shared by the samplers and cluster passes.
Child sources are derived from the parent's seed sequence, so a nested pass
never consumes the parent's stream.
"""

from __future__ import annotations

import numpy as np

from terrapop.core.error_codes import INVALID_COUNT, ConfigError


class PseudoRandomSource:
    """Uniform floats in [0, 1) and bounded integers, backed by numpy's PCG64."""

    def __init__(self, seed: int | None = None) -> None:
        self._init_from(np.random.SeedSequence(seed))
        self.seed = seed

    @classmethod
    def _from_sequence(cls, seq: np.random.SeedSequence) -> PseudoRandomSource:
        src = cls.__new__(cls)
        src._init_from(seq)
        src.seed = None
        return src

    def _init_from(self, seq: np.random.SeedSequence) -> None:
        self._seq = seq
        self._gen = np.random.Generator(np.random.PCG64(seq))

    @property
    def entropy(self) -> int:
        """Root entropy of the seed sequence. Passing it back as seed reproduces an implicitly seeded source."""
        return int(self._seq.entropy)

    def uniform_float(self) -> float:
        return float(self._gen.random())

    def uniform_int(self, max_inclusive: int) -> int:
        """Integer in [0, max_inclusive]. A bound of 0 returns 0 without drawing."""
        if max_inclusive < 0:
            raise ConfigError(INVALID_COUNT, f"max_inclusive={max_inclusive}")
        if max_inclusive == 0:
            return 0
        return int(self._gen.integers(0, max_inclusive, endpoint=True))

    def spawn(self) -> PseudoRandomSource:
        """Independent child source, derived deterministically in call order."""
        (child,) = self._seq.spawn(1)
        return PseudoRandomSource._from_sequence(child)
