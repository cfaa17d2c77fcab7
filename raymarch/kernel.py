"""Top-level ray-marching kernel: map loading and ray casting for a batch of particles."""

from __future__ import annotations

from collections.abc import Sequence

from .compute import collect, compute_engine, dispatch
from .fixedpoint import DIST, HP, Config
from .params import NUM_PE, SUPPORTED_PE, check_limits


def load_map(dist_map: Sequence[float], height: int, width: int) -> list[int]:
    """Convert a row-major distance map to 16-bit distance words.

    Values are truncated to the distance format; out-of-range values wrap.
    """
    if height < 0 or width < 0:
        raise ValueError("map dimensions must not be negative")
    size = height * width
    if len(dist_map) < size:
        raise ValueError(f"distance map holds {len(dist_map)} cells, expected {size}")
    return [DIST.from_float(value) for value in dist_map[:size]]


def compute_rays(
    private_map: Sequence[int],
    x: Sequence[float],
    y: Sequence[float],
    yaw: Sequence[float],
    angles: Sequence[float],
    config: Config,
    num_pe: int = NUM_PE,
) -> list[float]:
    """Cast the rays of ``config.n_particles`` particles and return their lengths.

    The result is flat: the rays of particle 0 first, then those of particle 1,
    and so on, in the order of ``angles``.
    """
    n_particles = config.n_particles
    for name, values in (("x", x), ("y", y), ("yaw", yaw)):
        if len(values) < n_particles:
            raise ValueError(f"{name} holds {len(values)} values, expected {n_particles}")
    cells = config.map_height * config.map_width
    if len(private_map) < cells:
        raise ValueError(f"map holds {len(private_map)} cells, expected {cells}")

    local_angles = [HP.quantize(angle) for angle in angles]
    rays: list[float] = []
    for index in range(n_particles):
        particle = dispatch(index, x, y, yaw)
        bits = compute_engine(particle, local_angles, config, private_map, num_pe)
        rays.extend(collect(bits))
    return rays


class RayMarcher:
    """A ray marcher bound to one map geometry, holding the loaded distance map."""

    def __init__(
        self,
        map_height: int,
        map_width: int,
        orig_x: float,
        orig_y: float,
        map_resolution: float,
        num_pe: int = NUM_PE,
    ) -> None:
        check_limits(map_height, map_width, 0)
        if num_pe not in SUPPORTED_PE:
            raise ValueError(f"unsupported number of processing elements: {num_pe}")
        self.map_height = map_height
        self.map_width = map_width
        self.orig_x = orig_x
        self.orig_y = orig_y
        self.map_resolution = map_resolution
        self.num_pe = num_pe
        self._private_map: list[int] | None = None

    @property
    def loaded(self) -> bool:
        """Whether a distance map has been loaded."""
        return self._private_map is not None

    def load_map(self, dist_map: Sequence[float]) -> None:
        """Store a row-major distance map in the marcher's private memory."""
        self._private_map = load_map(dist_map, self.map_height, self.map_width)

    def compute(
        self,
        x: Sequence[float],
        y: Sequence[float],
        yaw: Sequence[float],
        angles: Sequence[float],
        n_particles: int | None = None,
    ) -> list[float]:
        """Cast rays for the given particles against the loaded map."""
        if self._private_map is None:
            raise RuntimeError("no distance map loaded")
        if n_particles is None:
            n_particles = len(x)
        if n_particles < 0:
            raise ValueError("n_particles must not be negative")
        check_limits(self.map_height, self.map_width, n_particles)
        config = Config(
            self.map_height,
            self.map_width,
            n_particles,
            self.orig_x,
            self.orig_y,
            self.map_resolution,
        )
        return compute_rays(self._private_map, x, y, yaw, angles, config, self.num_pe)