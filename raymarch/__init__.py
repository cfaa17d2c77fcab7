"""Fixed-point ray marching over distance-transform maps for particle-filter localisation."""

__version__ = "0.1.0"
__all__ = ["compute", "fixedpoint", "kernel", "params"]