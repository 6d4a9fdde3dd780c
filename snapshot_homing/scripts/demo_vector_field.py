#!/usr/bin/env python3
"""
Demo: homing vector field around three landmarks.

Builds the classic three-landmark scene (goal at the origin), generates
the homing field on a 15x15 grid, and prints it as arrow glyphs together
with the average angular error against the true goal direction.

Usage:
    python demo_vector_field.py
    python demo_vector_field.py --classic -v
"""

import argparse
import logging
import math
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from snapshot_homing.navigation import (
    FieldGenerator,
    Grid,
    HomingConfig,
    LandmarkModel,
    Point,
    SampleRegion,
    Scene,
)

ARROWS = "→↗↑↖←↙↓↘"

LANDMARKS = [
    (3.5, 2.0, 0.5),
    (3.5, -2.0, 0.5),
    (0.0, -4.0, 0.5),
]


def arrow_for(dx: float, dy: float) -> str:
    """Pick the arrow glyph closest to the vector direction."""
    if dx == 0.0 and dy == 0.0:
        return "·"
    octant = int(round(math.atan2(dy, dx) / (math.pi / 4))) % 8
    return ARROWS[octant]


def render_text(field, goal: Point) -> str:
    """Render a vector field as rows of arrows, top row = largest y."""
    lookup = {s.position.as_tuple(): s.vector for s in field.samples}
    rows = []
    for y in reversed(field.grid.ys):
        row = []
        for x in field.grid.xs:
            if (x, y) == goal.as_tuple():
                row.append("+")
            elif (x, y) in lookup:
                vec = lookup[(x, y)]
                row.append(arrow_for(vec.dx, vec.dy))
            else:
                row.append("x")
        rows.append(" ".join(row))
    return "\n".join(rows)


def main():
    parser = argparse.ArgumentParser(description="Snapshot homing field demo")
    parser.add_argument(
        "--classic",
        action="store_true",
        help="Use unit votes with 3:1 radial weighting",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = HomingConfig.classic_weighting() if args.classic else HomingConfig()
    goal = Point(0.0, 0.0)
    scene = Scene.build(LandmarkModel.from_tuples(LANDMARKS), goal, config)

    grid = Grid.from_step(SampleRegion(-7.0, 7.0, -7.0, 7.0), 1.0)
    field = FieldGenerator(scene).generate(grid)

    print("\n" + "=" * 60)
    print("Snapshot Homing Vector Field")
    print("=" * 60)
    print(render_text(field, goal))
    print("-" * 60)
    print(f"Samples: {len(field)}  Skipped: {len(field.skipped)}")
    print(f"Average angular error: {math.degrees(field.average_angular_error()):.2f} deg")


if __name__ == "__main__":
    main()
