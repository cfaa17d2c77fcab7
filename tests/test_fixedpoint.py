import math

import pytest

from raymarch.fixedpoint import (
    DIST,
    HP,
    Config,
    FixedFormat,
    Particle,
    dist_bits_to_hp,
    hp_to_dist_bits,
)


def lsb(fmt):
    return math.ldexp(1.0, -fmt.frac_bits)


def test_one_raw_step_is_one_lsb():
    assert HP.to_float(1) == math.ldexp(1.0, -15)
    assert DIST.to_float(1) == math.ldexp(1.0, -11)
    assert DIST.to_float(1 << 11) == 1.0
    assert FixedFormat(22, 7).to_float(1 << 15) == 1.0


@pytest.mark.parametrize("value", [0.0, 0.25, -0.5, 1.5, -3.125, 10.75])
def test_exact_values_round_trip(value):
    assert HP.to_float(HP.from_float(value)) == value


@pytest.mark.parametrize("value", [0.1, 1.7, 3.3333, -2.71828, 11.49])
def test_quantize_truncates_down(value):
    q = HP.quantize(value)
    assert q <= value
    assert value - q < lsb(HP)


@pytest.mark.parametrize("value", [0.1, -7.77, 31.9])
def test_quantize_idempotent(value):
    q = HP.quantize(value)
    assert HP.quantize(q) == q


def test_signed_wrap_top_bit_becomes_negative():
    assert HP.wrap(1 << (HP.total_bits - 1)) == -(1 << (HP.total_bits - 1))


def test_signed_overflow_wraps_to_minimum():
    top = math.ldexp(1.0, HP.int_bits - 1)
    assert HP.quantize(top) == -top


def test_unsigned_negative_wraps_around_range():
    span = math.ldexp(1.0, DIST.int_bits)
    assert DIST.quantize(-1.0) == span - 1.0


def test_wrap_is_periodic():
    for raw in (-5, 0, 7, 12345):
        assert DIST.wrap(raw + (1 << DIST.total_bits)) == DIST.wrap(raw)
        assert HP.wrap(raw + (1 << HP.total_bits)) == HP.wrap(raw)


def test_unsigned_wrap_non_negative():
    for raw in (-1, -100, 1 << 20):
        assert 0 <= DIST.wrap(raw) < (1 << DIST.total_bits)


def test_non_finite_rejected():
    with pytest.raises(ValueError):
        HP.from_float(float("inf"))
    with pytest.raises(ValueError):
        HP.from_float(float("nan"))


def test_invalid_format_rejected():
    with pytest.raises(ValueError):
        FixedFormat(8, 9)
    with pytest.raises(ValueError):
        FixedFormat(0, 0)


@pytest.mark.parametrize("bits", [0, 1, 2048, 12345, 0xFFFF])
def test_dist_to_hp_preserves_value(bits):
    assert HP.to_float(dist_bits_to_hp(bits)) == DIST.to_float(bits)


@pytest.mark.parametrize("bits", [0, 1, 2048, 12345, 0xFFFF])
def test_dist_hp_round_trip(bits):
    assert hp_to_dist_bits(dist_bits_to_hp(bits)) == bits


@pytest.mark.parametrize("value", [0.0, 1.0, 2.5, 11.5, 0.05])
def test_hp_to_dist_keeps_value_in_range(value):
    bits = hp_to_dist_bits(HP.from_float(value))
    assert DIST.to_float(bits) == DIST.quantize(value)
    assert 0 <= bits <= 0xFFFF


def test_particle_is_quantized():
    p = Particle(0.1, -1.3, 2.2)
    assert p.x == HP.quantize(0.1)
    assert p.y == HP.quantize(-1.3)
    assert p.yaw == HP.quantize(2.2)


def test_config_wraps_counts_and_quantizes_reals():
    c = Config(
        map_height=(1 << 16) + 5,
        map_width=485,
        n_particles=2000,
        orig_x=0.3,
        orig_y=-0.7,
        map_resolution=0.05,
    )
    assert c.map_height == 5
    assert c.map_width == 485
    assert c.n_particles == 2000
    assert c.orig_x == HP.quantize(0.3)
    assert c.orig_y == HP.quantize(-0.7)
    assert c.map_resolution == HP.quantize(0.05)