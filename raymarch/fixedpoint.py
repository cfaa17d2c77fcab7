"""Fixed-point number formats and the particle/config records used by the ray marcher."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

HP_BITS = 22
HP_INT_BITS = 7
DIST_BITS = 16
DIST_INT_BITS = 5
ITER_BITS = 16

# Bit window of a high-precision word that lines up with a distance word.
_WINDOW_HI = HP_BITS - (HP_INT_BITS - DIST_INT_BITS)
_WINDOW_LO = _WINDOW_HI - DIST_BITS


@dataclass(frozen=True)
class FixedFormat:
    """A binary fixed-point format with truncating quantization and wrapping overflow.

    Raw values are plain integers holding the stored word, sign-extended for
    signed formats.
    """

    total_bits: int
    int_bits: int
    signed: bool = True
    frac_bits: int = field(init=False)

    def __post_init__(self) -> None:
        if self.total_bits <= 0:
            raise ValueError("total_bits must be positive")
        if self.int_bits > self.total_bits:
            raise ValueError("int_bits cannot exceed total_bits")
        object.__setattr__(self, "frac_bits", self.total_bits - self.int_bits)

    def wrap(self, raw: int) -> int:
        """Reduce an integer to the word width, sign-extending for signed formats."""
        raw &= (1 << self.total_bits) - 1
        if self.signed and raw >= 1 << (self.total_bits - 1):
            raw -= 1 << self.total_bits
        return raw

    def from_float(self, value: float) -> int:
        """Convert a real number to a raw word, truncating towards minus infinity."""
        if not math.isfinite(value):
            raise ValueError(f"cannot represent non-finite value {value!r}")
        return self.wrap(math.floor(math.ldexp(value, self.frac_bits)))

    def to_float(self, raw: int) -> float:
        """Return the real value of a raw word."""
        return math.ldexp(self.wrap(raw), -self.frac_bits)

    def quantize(self, value: float) -> float:
        """Round a real number through the format and back."""
        return self.to_float(self.from_float(value))


HP = FixedFormat(HP_BITS, HP_INT_BITS, signed=True)
DIST = FixedFormat(DIST_BITS, DIST_INT_BITS, signed=False)


def _to_iter(value: int) -> int:
    return int(value) & ((1 << ITER_BITS) - 1)


def dist_bits_to_hp(bits: int) -> int:
    """Place a distance-map word into a high-precision raw word of equal value."""
    return HP.wrap((bits & ((1 << DIST_BITS) - 1)) << _WINDOW_LO)


def hp_to_dist_bits(raw: int) -> int:
    """Take the distance-map word out of a high-precision raw word."""
    return (raw >> _WINDOW_LO) & ((1 << DIST_BITS) - 1)


@dataclass(frozen=True)
class Particle:
    """A particle pose, stored in the high-precision format."""

    x: float
    y: float
    yaw: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "yaw"):
            object.__setattr__(self, name, HP.quantize(getattr(self, name)))


@dataclass(frozen=True)
class Config:
    """Map geometry and particle count for one ray-marching run."""

    map_height: int
    map_width: int
    n_particles: int
    orig_x: float
    orig_y: float
    map_resolution: float

    def __post_init__(self) -> None:
        for name in ("map_height", "map_width", "n_particles"):
            object.__setattr__(self, name, _to_iter(getattr(self, name)))
        for name in ("orig_x", "orig_y", "map_resolution"):
            object.__setattr__(self, name, HP.quantize(getattr(self, name)))