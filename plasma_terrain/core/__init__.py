"""
Core terrain generation functionality.
"""

from .alea_prng import AleaPRNG
from .fractal_map import FractalMap, padded_dimensions
from .cross_fade import CrossFadeController, FadeCycle, TerrainOptions

__all__ = ['AleaPRNG', 'FractalMap', 'padded_dimensions',
           'CrossFadeController', 'FadeCycle', 'TerrainOptions']
