"""
Cross-fading between two generations of fractal terrain.

A scrolling landscape must never repeat visibly, so the controller keeps two
map slots ("current" and "next") for both terrain height and vegetation
density and fades between them while the driver advances row by row:

    state 0: show current
    state 1: fade current -> next   (next is regenerated on entry)
    state 2: show next
    state 3: fade next -> current   (current is regenerated on entry)

Each state lasts ``fade_period`` rows, half the terrain grid height.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
import structlog

from ..utils.random import get_prng, set_random_seed, uniform
from .fractal_map import FractalMap

logger = structlog.get_logger()

SHOW_CURRENT = 0
FADE_TO_NEXT = 1
SHOW_NEXT = 2
FADE_TO_CURRENT = 3
FADE_STATES = 4


@dataclass
class TerrainOptions:
    """Random ranges used whenever a map is (re)generated."""

    peak_size_range: Tuple[float, float] = (0.25, 2.25)
    peak_fall_range: Tuple[float, float] = (0.35, 0.55)
    vegetation_scale: float = 0.1  # Vegetation grid size relative to terrain

    def __post_init__(self):
        for name in ("peak_size_range", "peak_fall_range"):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} is inverted: {low} > {high}")

    def draw_peak_parameters(self, rng) -> Tuple[float, float]:
        """Draw (peak_size, peak_fall) for one map."""
        peak_size = uniform(rng, *self.peak_size_range)
        peak_fall = uniform(rng, *self.peak_fall_range)
        return peak_size, peak_fall

    def vegetation_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            math.floor(width * self.vegetation_scale),
            math.floor(height * self.vegetation_scale),
        )


@dataclass
class FadeCycle:
    """Fade state machine; ``advance`` is its only mutator."""

    period: int
    state: int = SHOW_CURRENT
    tick: int = 0

    def advance(self) -> bool:
        """
        Count one row.

        Returns:
            True when the row moved the cycle into a new state
        """
        self.tick += 1
        if self.tick < self.period:
            return False

        self.tick = 0
        self.state = (self.state + 1) % FADE_STATES
        return True

    @property
    def progress(self) -> float:
        """Fraction of the active fade already shown; 1.0 for an empty period."""
        if self.period <= 0:
            return 1.0
        return self.tick / self.period

    def blend(self, v1: float, v2: float) -> float:
        return v1 + (v2 - v1) * self.progress


class CrossFadeController:
    """
    Sampling front-end over two generations of terrain and vegetation maps.

    The next slot stays empty until the first fade starts.
    """

    def __init__(
        self,
        width: int,
        height: int,
        options: Optional[TerrainOptions] = None,
        rng=None,
    ):
        """
        Generate the initial terrain and vegetation maps.

        Args:
            width: Requested terrain width
            height: Requested terrain height
            options: Peak parameter ranges and vegetation scale
            rng: Random source shared by all four maps
        """
        self.options = options or TerrainOptions()
        self.rng = rng or get_prng()

        self.terrain = FractalMap(self.rng)
        self.vegetation = FractalMap(self.rng)
        self.next_terrain = FractalMap(self.rng)
        self.next_vegetation = FractalMap(self.rng)

        self._regenerate(self.terrain, self.vegetation, width, height)
        self.cycle = FadeCycle(period=self.terrain.side_height // 2)

        logger.info(
            "Cross-fade controller ready",
            side_width=self.terrain.side_width,
            side_height=self.terrain.side_height,
            fade_period=self.cycle.period,
        )

    @classmethod
    def from_settings(cls, settings, options: Optional[TerrainOptions] = None):
        """Build a controller from the configured default size and seed."""
        rng = set_random_seed(settings.seed) if settings.seed is not None else None
        return cls(
            settings.default_map_width,
            settings.default_map_height,
            options=options,
            rng=rng,
        )

    @property
    def fade_state(self) -> int:
        return self.cycle.state

    @property
    def fade_tick(self) -> int:
        return self.cycle.tick

    @property
    def fade_period(self) -> int:
        return self.cycle.period

    def _visible_terrain(self) -> FractalMap:
        return self.next_terrain if self.cycle.state == SHOW_NEXT else self.terrain

    def _visible_vegetation(self) -> FractalMap:
        return self.next_vegetation if self.cycle.state == SHOW_NEXT else self.vegetation

    @property
    def terrain_width(self) -> int:
        return self._visible_terrain().side_width

    @property
    def terrain_height(self) -> int:
        return self._visible_terrain().side_height

    @property
    def vegetation_width(self) -> int:
        return self._visible_vegetation().side_width

    @property
    def vegetation_height(self) -> int:
        return self._visible_vegetation().side_height

    def _regenerate(self, terrain: FractalMap, vegetation: FractalMap, width: int, height: int):
        terrain.generate(width, height, *self.options.draw_peak_parameters(self.rng), rng=self.rng)
        veg_width, veg_height = self.options.vegetation_size(width, height)
        vegetation.generate(veg_width, veg_height, *self.options.draw_peak_parameters(self.rng), rng=self.rng)

    def advance_row(self) -> None:
        """Advance the fade cycle by one rendered row."""
        if not self.cycle.advance():
            return

        state = self.cycle.state
        if state == FADE_TO_NEXT:
            self._regenerate(
                self.next_terrain,
                self.next_vegetation,
                self.terrain.side_width,
                self.terrain.side_height,
            )
        elif state == FADE_TO_CURRENT:
            self._regenerate(
                self.terrain,
                self.vegetation,
                self.next_terrain.side_width,
                self.next_terrain.side_height,
            )
        logger.info(
            "Fade state changed",
            fade_state=state,
            regenerated=state in (FADE_TO_NEXT, FADE_TO_CURRENT),
        )

    def _blended(self, current: FractalMap, upcoming: FractalMap, read: Callable[[FractalMap], float]) -> float:
        state = self.cycle.state
        if state == SHOW_CURRENT:
            return read(current)
        if state == SHOW_NEXT:
            return read(upcoming)
        if state == FADE_TO_NEXT:
            v1, v2 = read(current), read(upcoming)
        else:
            v1, v2 = read(upcoming), read(current)
        return self.cycle.blend(v1, v2)

    def sample_height(self, x: float, y: float) -> float:
        return self._blended(self.terrain, self.next_terrain, lambda m: m.sample(x, y))

    def sample_height_interpolated(self, x: float, y: float) -> float:
        return self._blended(self.terrain, self.next_terrain, lambda m: m.sample_interpolated(x, y))

    def sample_vegetation(self, x: float, y: float) -> float:
        return self._blended(self.vegetation, self.next_vegetation, lambda m: m.sample(x, y))

    def sample_vegetation_interpolated(self, x: float, y: float) -> float:
        return self._blended(self.vegetation, self.next_vegetation, lambda m: m.sample_interpolated(x, y))

    def vegetation_at_terrain(self, x: float, y: float) -> float:
        """
        Vegetation density under a terrain coordinate, mapped by grid ratio.

        The first vegetation map is sized from the requested terrain size and
        later ones from the padded size, so the two slots can differ; each
        map gets the coordinate scaled to its own grid.
        """
        # Both terrain slots share one size
        fx = x / self.terrain.side_width
        fy = y / self.terrain.side_height
        return self._blended(
            self.vegetation,
            self.next_vegetation,
            lambda m: m.sample_interpolated(fx * m.side_width, fy * m.side_height),
        )

    def sample_row(self, y: float, width: int, interpolated: bool = True, offset: float = 0.5) -> np.ndarray:
        """
        Blended heights for one terrain row without advancing the cycle.

        Args:
            y: Row coordinate
            width: Number of samples
            interpolated: Sample between grid points at (x + offset, y + offset)
            offset: Sub-cell offset for interpolated samples
        """
        if interpolated:
            heights = [self.sample_height_interpolated(x + offset, y + offset) for x in range(width)]
        else:
            heights = [self.sample_height(x, y) for x in range(width)]
        return np.array(heights, dtype=np.float64)
