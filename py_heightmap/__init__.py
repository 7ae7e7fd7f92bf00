"""Diamond-square heightmap generation."""

from .core import (
    AleaRandomSource,
    HeightMapGenerator,
    LCGRandomSource,
    NumpyRandomSource,
    RandomSource,
    ScaleMode,
)

__version__ = "0.1.0"

__all__ = ['HeightMapGenerator', 'ScaleMode', 'RandomSource', 'LCGRandomSource',
           'AleaRandomSource', 'NumpyRandomSource']
