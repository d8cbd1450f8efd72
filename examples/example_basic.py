"""
Basic example of using the spatial hash grid.

This example demonstrates:
1. Building a grid from a preset
2. Tracking moving cubes (trimesh boxes) on the xz ground plane
3. Querying the neighbourhood of a point each frame
4. Plotting the final state
"""

import numpy as np
import trimesh

from hashgrid_lib import create_grid, ObjectTracker, compute_occupancy
from hashgrid_lib.visualization import plot_grid


class Cube:
    def __init__(self, position, size):
        self.position = np.asarray(position, dtype=float)
        self.mesh = trimesh.creation.box(extents=(size, size, size))
        self.velocity = np.zeros(3)


rng = np.random.default_rng(0)
grid = create_grid(preset="demo_16x16")
tracker = ObjectTracker(grid, plane="xz")

cubes = []
for _ in range(40):
    cube = Cube((rng.uniform(0, 16), 0.5, rng.uniform(0, 16)), size=1.0)
    cube.velocity = np.array([rng.normal(0, 0.2), 0.0, rng.normal(0, 0.2)])
    tracker.add(cube)
    cubes.append(cube)

print("Simulating 100 frames...")

for frame in range(100):
    for cube in cubes:
        cube.position += cube.velocity
        cube.position[[0, 2]] = np.clip(cube.position[[0, 2]], 0, 16)
    result = tracker.update_all()
    nearby = tracker.get_nearby_objects((8, 0, 8), (3, 3))
    if frame % 20 == 0:
        print(f"frame {frame:3d}: {result.message}, {len(nearby)} cubes near the center")

print("\n=== Occupancy ===")
for key, value in compute_occupancy(grid).items():
    print(f"{key}: {value}")

plot_grid(grid, query=((8, 8), (3, 3)), title="Cubes after 100 frames")
