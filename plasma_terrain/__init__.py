"""Plasma fractal terrain with seamless cross-fading between generations."""

from .core import AleaPRNG, CrossFadeController, FadeCycle, FractalMap, TerrainOptions

__version__ = "0.1.0"

__all__ = ['AleaPRNG', 'CrossFadeController', 'FadeCycle', 'FractalMap', 'TerrainOptions']
