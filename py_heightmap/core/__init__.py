"""
Core map generation functionality.
"""

from .random_source import RandomSource, LCGRandomSource, AleaRandomSource, NumpyRandomSource
from .heightmap_generator import HeightMapGenerator, ScaleMode, FLOAT_TYPES

__all__ = ['RandomSource', 'LCGRandomSource', 'AleaRandomSource', 'NumpyRandomSource',
           'HeightMapGenerator', 'ScaleMode', 'FLOAT_TYPES']
