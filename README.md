# raymarch

Simulated range readings for particle-filter localisation. For each particle
pose, `raymarch` marches rays through a precomputed distance-transform map and
returns how far each ray travels. All arithmetic is done in fixed point, with
truncation and wrap-around:

* Map cells are unsigned 16-bit fixed-point words with 5 integer bits.
* Poses, angles and distances are signed 22-bit fixed-point values with 7 integer bits.

## Installation

```
pip install .
```

The package has no runtime dependencies. To install the test requirements as well, use `pip install .[test]`.

## Usage

```python
from raymarch.kernel import RayMarcher

marcher = RayMarcher(
    map_height=379,
    map_width=485,
    orig_x=12.0,
    orig_y=9.0,
    map_resolution=0.05,
    num_pe=32,
)

# dist_map: row-major sequence of at least height * width distances, in metres
marcher.load_map(dist_map)

# angles: at least 60 ray angles, relative to the first ray of the scan
rays = marcher.compute(x, y, yaw, angles, n_particles=len(x))
```

`compute` returns a flat list of 60 ranges per particle: those of particle 0
first, then particle 1, and so on. Only the first 60 entries of `angles` are
used. `n_particles` defaults to `len(x)`.

`RayMarcher` checks the map size when it is created and the particle count on
each call to `compute`, raising `ValueError` when a limit is exceeded (map
height 379, map width 485, 2000 particles) or when `num_pe` is not one of
1, 2, 4, 8, 16 or 32. Calling `compute` before `load_map` raises
`RuntimeError`. The `loaded` property tells whether a map has been loaded.
`num_pe` sets how many rays are grouped per batch; it does not change the results.

## Lower-level functions

* `raymarch.kernel.load_map(dist_map, height, width)` converts a float map to 16-bit cell words.
* `raymarch.kernel.compute_rays(private_map, x, y, yaw, angles, config, num_pe)` casts the rays of `config.n_particles` particles. It checks the input lengths but not the size limits.
* `raymarch.compute.compute_ray(particle, angle, config, dist_map)` marches a single ray and returns its length as a cell word.
* `raymarch.compute.compute_engine(particle, angles, config, dist_map, num_pe)` casts all 60 rays of one particle.
* `raymarch.compute.dispatch(index, x, y, yaw)` builds a `Particle`; `raymarch.compute.collect(ray_bits)` turns cell words into distances.
* `raymarch.fixedpoint.FixedFormat` models a fixed-point format (`from_float`, `to_float`, `quantize`, `wrap`); `HP` and `DIST` are the two formats used. `Particle` and `Config` hold quantised poses and map settings.
* `raymarch.params.check_limits(map_height, map_width, n_particles)` validates sizes; `raymarch.params.real_ray_count(n_rays, angle_step)` gives the number of rays kept when subsampling; `raymarch.params.Mode` names the two kernel operations.

## How a ray is cast

1. The particle's yaw is offset by the scan's minimum angle (−3π/4), then by the ray's angle.
   A ray angle above 1081 angle increments gives a range of 0.
2. The current cell is column `(orig_x - x) * 20`, row `(orig_y + y) * 20`:
   cells are 0.05 m in size, whatever `map_resolution` is.
3. If the cell is outside the map, the ray reports the maximum range of 11.5 m.
4. If the cell's distance is below `map_resolution`, the ray stops.
5. Otherwise the ray moves forward by that distance, for at most 80 steps.

## What it does not do

There is no command-line tool, and no reading of maps or particle sets from
files: maps and poses are passed in as Python sequences.

## Running the tests

```
pytest
```