"""Per-particle ray casting: dispatching poses, marching rays and collecting results."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .fixedpoint import DIST, HP, Config, Particle, dist_bits_to_hp, hp_to_dist_bits
from .params import ANGLE_INCREMENT, ANGLE_MIN, MAX_ITER, MAX_RANGE, N_REAL_RAYS, SUPPORTED_PE

_CELLS_PER_UNIT = 20
_ITER_MASK = 0xFFFF

_MAX_ANGLE_RAW = HP.from_float(1081 * ANGLE_INCREMENT)
_MAX_RANGE_RAW = HP.from_float(MAX_RANGE)


def _cell_index(raw: int) -> int:
    """Scale a full-precision HP difference to a cell index, as an unsigned 16-bit value."""
    scaled = raw * _CELLS_PER_UNIT
    whole = abs(scaled) >> HP.frac_bits
    if scaled < 0:
        whole = -whole
    return whole & _ITER_MASK


def _step(pose_raw: int, d_raw: int, trig_raw: int) -> int:
    """Advance a coordinate by ``d * trig``, truncating back to the HP format."""
    exact = (pose_raw << HP.frac_bits) + d_raw * trig_raw
    return HP.wrap(exact >> HP.frac_bits)


def compute_ray(particle: Particle, angle: float, config: Config, dist_map: Sequence[int]) -> int:
    """March one ray through a distance map and return its length as a distance-map word.

    ``angle`` is relative to the particle's yaw. ``dist_map`` holds 16-bit
    distance words in row-major order, ``config.map_width`` per row.
    """
    angle_raw = HP.from_float(angle)
    if angle_raw > _MAX_ANGLE_RAW:
        return 0

    angle_raw = HP.wrap(angle_raw + HP.from_float(particle.yaw))
    heading = HP.to_float(angle_raw)
    cos_raw = HP.from_float(math.cos(heading))
    sin_raw = HP.from_float(math.sin(heading))

    pose_x = HP.from_float(particle.x)
    pose_y = HP.from_float(particle.y)
    orig_x = HP.from_float(config.orig_x)
    orig_y = HP.from_float(config.orig_y)
    resolution = HP.from_float(config.map_resolution)
    distance = 0

    for _ in range(MAX_ITER):
        c = _cell_index(orig_x - pose_x)
        r = _cell_index(orig_y + pose_y)
        if c >= config.map_width or r >= config.map_height:
            distance = _MAX_RANGE_RAW
            break

        d = dist_bits_to_hp(dist_map[r * config.map_width + c])
        if d < resolution:
            break

        distance = HP.wrap(distance + d)
        pose_x = _step(pose_x, d, cos_raw)
        pose_y = _step(pose_y, d, sin_raw)

    return hp_to_dist_bits(distance)


def compute_engine(
    particle: Particle,
    angles: Sequence[float],
    config: Config,
    dist_map: Sequence[int],
    num_pe: int,
) -> list[int]:
    """Cast every ray of one particle, ``num_pe`` rays at a time, in ray order."""
    if num_pe not in SUPPORTED_PE:
        raise ValueError(f"unsupported number of processing elements: {num_pe}")
    if len(angles) < N_REAL_RAYS:
        raise ValueError(f"expected {N_REAL_RAYS} ray angles, got {len(angles)}")

    rays: list[int] = []
    for start in range(0, N_REAL_RAYS, num_pe):
        batch = angles[start : min(start + num_pe, N_REAL_RAYS)]
        rays.extend(compute_ray(particle, angle, config, dist_map) for angle in batch)
    return rays


def dispatch(index: int, x: Sequence[float], y: Sequence[float], yaw: Sequence[float]) -> Particle:
    """Build the pose of particle ``index``, with its yaw moved to the first ray's bearing."""
    heading = HP.to_float(HP.wrap(HP.from_float(yaw[index]) + HP.from_float(ANGLE_MIN)))
    return Particle(x[index], y[index], heading)


def collect(ray_bits: Iterable[int]) -> list[float]:
    """Convert distance-map words of cast rays to real distances."""
    return [DIST.to_float(bits) for bits in ray_bits]