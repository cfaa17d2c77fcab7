"""Fixed limits and parameters of the ray marcher."""

from __future__ import annotations

from enum import IntEnum

MAX_ITER = 80
MAX_WIDTH = 485
MAX_HEIGHT = 379
ANGLE_STEP = 18
ANGLE_INCREMENT = 4.35928675336234e-3
N_RAYS = 1080
N_REAL_RAYS = 60
ANGLE_MIN = -2.35619449615
MAX_RANGE = 11.5
MAX_PARTICLES = 2000

SUPPORTED_PE = (1, 2, 4, 8, 16, 32)
NUM_PE = 32

DEPTH_DIST_MAP = MAX_WIDTH * MAX_HEIGHT
DEPTH_PARTICLES = MAX_PARTICLES
DEPTH_RAYS = MAX_PARTICLES * N_RAYS
DEPTH_RAYS_ANGLE = N_REAL_RAYS


class Mode(IntEnum):
    """What a kernel invocation does."""

    MAP_LOAD = 0
    COMPUTE_RAYS = 1


def real_ray_count(n_rays: int, angle_step: int) -> int:
    """Number of rays actually cast when every ``angle_step``-th ray is kept."""
    if angle_step <= 0:
        raise ValueError("angle_step must be positive")
    if n_rays < 0:
        raise ValueError("n_rays must not be negative")
    return -(-n_rays // angle_step)


def check_limits(map_height: int, map_width: int, n_particles: int) -> None:
    """Raise ValueError if the map or particle count exceeds the supported maximum."""
    if map_height > MAX_HEIGHT:
        raise ValueError(f"map_height {map_height} exceeds {MAX_HEIGHT}")
    if map_width > MAX_WIDTH:
        raise ValueError(f"map_width {map_width} exceeds {MAX_WIDTH}")
    if n_particles > MAX_PARTICLES:
        raise ValueError(f"n_particles {n_particles} exceeds {MAX_PARTICLES}")
    if real_ray_count(N_RAYS, ANGLE_STEP) != N_REAL_RAYS:
        raise ValueError("ray count does not match the angle step")