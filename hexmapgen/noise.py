from __future__ import annotations

"""Deterministic gradient noise used for cosmetic per-position jitter."""

import math
import random
from typing import Tuple

# Fixed seed of the noise field. The field is shared by every map; a run only
# chooses which channel to read.
NOISE_SEED = 0x5EED
NOISE_CHANNELS = 4
# Scale from world-space cell positions into noise lattice units.
NOISE_SCALE = 0.003 * 16.0


def _stable_hash(*args: int) -> int:
    """
    Combine integer arguments into a single 64-bit integer.
    Unlike built-in hash(), the result is repeatable across Python runs.
    """
    x = 0x345678ABCDEF1234
    for a in args:
        a &= 0xFFFFFFFFFFFFFFFF
        a ^= a >> 33
        a = (a * 0xFF51AFD7ED558CCD) & 0xFFFFFFFFFFFFFFFF
        a ^= a >> 33
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & 0xFFFFFFFFFFFFFFFF
    return x


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _gradient(ix: int, iy: int, seed: int) -> Tuple[float, float]:
    rng = random.Random(_stable_hash(ix, iy, seed))
    angle = rng.random() * 2.0 * math.pi
    return math.cos(angle), math.sin(angle)


def _perlin(x: float, y: float, seed: int) -> float:
    """Single-octave Perlin noise shifted into [0, 1]."""
    x0 = math.floor(x)
    y0 = math.floor(y)

    def corner(ix: int, iy: int) -> float:
        gx, gy = _gradient(ix, iy, seed)
        return gx * (x - ix) + gy * (y - iy)

    sx = _fade(x - x0)
    sy = _fade(y - y0)
    top = _lerp(corner(x0, y0), corner(x0 + 1, y0), sx)
    bottom = _lerp(corner(x0, y0 + 1), corner(x0 + 1, y0 + 1), sx)
    return (_lerp(top, bottom, sy) + 1.0) / 2.0


def perlin_noise(
    x: float,
    y: float,
    seed: int,
    octaves: int = 2,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 1.0,
) -> float:
    """
    Fractal Perlin noise at (x, y).
    Returns a normalized value in [0, 1].
    """
    value = 0.0
    amplitude = 1.0
    frequency = scale
    max_amp = 0.0
    for i in range(octaves):
        value += _perlin(x * frequency, y * frequency, seed + i) * amplitude
        max_amp += amplitude
        amplitude *= persistence
        frequency *= lacunarity
    return value / max_amp if max_amp > 0 else 0.0


def sample_noise(x: float, z: float, channel: int) -> float:
    """Sample one of the ``NOISE_CHANNELS`` noise channels at world position (x, z)."""
    return perlin_noise(x, z, NOISE_SEED + channel * 101, scale=NOISE_SCALE)


__all__ = ["NOISE_CHANNELS", "perlin_noise", "sample_noise"]
