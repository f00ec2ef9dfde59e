#!/usr/bin/env python3
"""
Simple demo script scrolling through a full fade cycle.
"""

import numpy as np
from plasma_terrain.config import settings
from plasma_terrain.core import AleaPRNG, CrossFadeController
from plasma_terrain.log_config import configure_logging

STATE_NAMES = ["show current", "fade to next", "show next", "fade to current"]


def main():
    """Scroll rows and report height statistics per fade phase."""
    configure_logging(settings)

    print("Plasma Terrain Scroll Demo")
    print("=" * 40)

    controller = CrossFadeController(128, 128, rng=AleaPRNG("scroll_demo"))
    print(f"Terrain grid: {controller.terrain_width}x{controller.terrain_height}")
    print(f"Vegetation grid: {controller.vegetation_width}x{controller.vegetation_height}")
    print(f"Fade period: {controller.fade_period} rows")

    y = 0
    for _ in range(4):
        state = controller.fade_state
        rows = []
        forest = []
        for _ in range(controller.fade_period):
            controller.advance_row()
            rows.append(controller.sample_row(y, controller.terrain_width))
            forest.append(controller.vegetation_at_terrain(0.5, y + 0.5))
            y += 1

        heights = np.concatenate(rows)
        print(f"\n{STATE_NAMES[state].upper()}")
        print("-" * 30)
        print(f"  Height range: {heights.min():.3f}-{heights.max():.3f}")
        print(f"  Average height: {heights.mean():.3f}")
        print(f"  Average vegetation at x=0: {np.mean(forest):.3f}")


if __name__ == "__main__":
    main()
