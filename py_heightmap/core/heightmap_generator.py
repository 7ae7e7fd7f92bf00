"""
Heightmap generation using the diamond-square algorithm.

The map is a square of ``2 ** size_factor + 1`` cells per side, stored
row-major in a flat NumPy array. Lookups wrap on both axes, so the
diamond and square steps that reach past an edge sample the opposite
edge and the resulting map tiles seamlessly.

https://en.wikipedia.org/wiki/Diamond-square_algorithm

Example::

    generator = HeightMapGenerator(8, 0.096, seed=42)
    generator.build()
    heights = generator.get_map()
"""

import math
import numbers
import time
from enum import Enum
from typing import Optional

import numpy as np
import structlog

from ..config import settings
from .random_source import LCGRandomSource, RandomSource

logger = structlog.get_logger()

# Element types the generator accepts: single, double and extended precision
FLOAT_TYPES = (np.float32, np.float64, np.longdouble)

MAX_SEED = 2**64


class ScaleMode(Enum):
    """How the random perturbation is scaled at each step."""

    # Historical formula (draw * scale * 2) / scale: the scale cancels out
    LITERAL = "literal"
    # draw * step / ((side - 1) * offset): shrinks as the step halves
    ATTENUATED = "attenuated"


def _validate_offset(offset) -> float:
    if not isinstance(offset, numbers.Real) or isinstance(offset, bool):
        raise ValueError(f"Offset must be a real number, got {offset!r}")
    if not math.isfinite(offset) or offset <= 0:
        raise ValueError(f"Offset must be a positive finite number, got {offset!r}")
    return float(offset)


def _validate_seed(seed) -> int:
    if not isinstance(seed, numbers.Integral) or isinstance(seed, bool):
        raise ValueError(f"Seed must be an integer, got {seed!r}")
    seed = int(seed)
    if not 0 <= seed < MAX_SEED:
        raise ValueError(f"Seed must be in [0, 2**64), got {seed}")
    return seed


class HeightMapGenerator:
    """
    Creates a height map with the diamond-square algorithm.

    Changing the seed or offset does not rebuild the map; call ``build``
    again to regenerate it with the new parameters.
    """

    MIN_FACTOR = settings.min_size_factor
    MAX_FACTOR = settings.max_size_factor

    def __init__(
        self,
        size_factor: int,
        offset: float,
        seed: Optional[int] = None,
        *,
        dtype=np.float64,
        random_source: Optional[RandomSource] = None,
        scale_mode: ScaleMode = ScaleMode.LITERAL,
    ):
        """
        Initialize the heightmap generator.

        Args:
            size_factor: Map side is 2 ** size_factor + 1. Values outside
                [MIN_FACTOR, MAX_FACTOR] are clamped into range.
            offset: Smoothing value, higher for more even terrain
            seed: Seed for the random source, current time if omitted
            dtype: Element type, float32, float64 or longdouble
            random_source: Source of uniform draws, LCGRandomSource if omitted
            scale_mode: Perturbation scaling, see ScaleMode
        """
        dtype = np.dtype(dtype)
        if dtype.type not in FLOAT_TYPES:
            raise TypeError(
                f"Heightmap type must be float32, float64 or longdouble, got {dtype}"
            )

        clamped = min(max(int(size_factor), self.MIN_FACTOR), self.MAX_FACTOR)
        if clamped != size_factor:
            logger.debug("Size factor clamped", requested=size_factor, size_factor=clamped)

        self._size_factor = clamped
        self._side = 2**clamped + 1
        self._dtype = dtype
        self._offset = _validate_offset(offset)
        self._seed = _validate_seed(int(time.time()) if seed is None else seed)
        self._scale_mode = ScaleMode(scale_mode)
        self._random_source = random_source if random_source is not None else LCGRandomSource()
        self._grid = np.zeros(self._side * self._side, dtype=self._dtype)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(side={self._side}, offset={self._offset}, "
            f"seed={self._seed}, dtype={self._dtype.name})"
        )

    @property
    def size_factor(self) -> int:
        return self._size_factor

    @property
    def side(self) -> int:
        return self._side

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def scale_mode(self) -> ScaleMode:
        return self._scale_mode

    def set_seed(self, seed: int) -> None:
        """Set the seed used by the next build."""
        self._seed = _validate_seed(seed)

    def set_offset(self, offset: float) -> None:
        """Set the offset used by the next build."""
        self._offset = _validate_offset(offset)

    def get_map(self) -> np.ndarray:
        """Copy of the height map as a flat row-major array."""
        return self._grid.copy()

    def get_grid(self) -> np.ndarray:
        """Copy of the height map shaped (side, side), indexed [y, x]."""
        return self._grid.reshape(self._side, self._side).copy()

    def get_value(self, pos: int):
        """
        Get a single value in the height map.

        Raises:
            IndexError: If pos is outside [0, side * side)
        """
        if not 0 <= pos < self._grid.size:
            raise IndexError(f"Invalid map position: {pos}")
        return self._grid[pos]

    def get_value_at(self, x: int, y: int):
        """Value at (x, y), wrapping both coordinates around the map."""
        return self._read(x, y)

    def __getitem__(self, pos: int):
        return self.get_value(pos)

    def __len__(self) -> int:
        return self._grid.size

    def build(self) -> "HeightMapGenerator":
        """
        Build the height map.

        Every call reseeds the random source and overwrites the whole map,
        so repeated builds with the same seed and offset give the same map.
        """
        side = self._side
        rng = self._random_source
        to_dtype = self._dtype.type
        offset = to_dtype(self._offset)

        logger.info(
            "Building heightmap",
            side=side,
            seed=self._seed,
            offset=self._offset,
            scale_mode=self._scale_mode.value,
        )

        rng.seed(self._seed)
        self._grid.fill(0)

        # The four corners also count as the first square step
        for x, y in ((0, 0), (side - 1, 0), (0, side - 1), (side - 1, side - 1)):
            self._write(x, y, to_dtype(rng.next_uniform()) / offset)
        draws = 4

        step = side - 1
        while step > 1:
            half = step // 2
            scale = self._step_scale(step)

            # Diamond phase
            for y in range(0, side - 1, step):
                for x in range(0, side - 1, step):
                    cor1 = self._read(x, y)
                    cor2 = self._read(x, y + step)
                    cor3 = self._read(x + step, y)
                    cor4 = self._read(x + step, y + step)
                    value = self._perturbation(to_dtype(rng.next_uniform()), scale)
                    self._write(x + half, y + half, (cor1 + cor2 + cor3 + cor4 + value) / 5)
                    draws += 1

            # Square phase
            for y in range(0, side, half):
                for x in range((y + half) % step, side, step):
                    cor1 = self._read(x, y - half)
                    cor2 = self._read(x + half, y)
                    cor3 = self._read(x, y + half)
                    cor4 = self._read(x - half, y)
                    value = self._perturbation(to_dtype(rng.next_uniform()), scale)
                    self._write(x, y, (cor1 + cor2 + cor3 + cor4 + value) / 5)
                    draws += 1

            step = half

        logger.info("Heightmap built", side=side, seed=self._seed, draws=draws)
        return self

    def _step_scale(self, step: int):
        to_dtype = self._dtype.type
        if self._scale_mode is ScaleMode.LITERAL:
            return to_dtype(self._offset) * to_dtype(step)
        return to_dtype(step) / (to_dtype(self._side - 1) * to_dtype(self._offset))

    def _perturbation(self, draw, scale):
        if self._scale_mode is ScaleMode.LITERAL:
            return (draw * scale * 2) / scale
        return draw * scale

    def _index(self, x: int, y: int) -> int:
        # Python's % already returns a non-negative result for negative x, y
        return (y % self._side) * self._side + (x % self._side)

    def _read(self, x: int, y: int):
        return self._grid[self._index(x, y)]

    def _write(self, x: int, y: int, value) -> None:
        self._grid[self._index(x, y)] = value
