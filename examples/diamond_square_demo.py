#!/usr/bin/env python3
"""
Demo script showing diamond-square heightmap generation.
"""

import argparse

import numpy as np

from py_heightmap import HeightMapGenerator, ScaleMode
from py_heightmap.utils import Benchmark, configure_logging


def print_statistics(heights):
    """Print summary statistics and an ASCII histogram."""
    print(f"  Height range: {np.min(heights):.3f}-{np.max(heights):.3f}")
    print(f"  Average height: {np.mean(heights):.3f}")
    print(f"  Std deviation: {np.std(heights):.3f}")

    hist, edges = np.histogram(heights, bins=8)
    print("  Height distribution:")
    for i in range(len(hist)):
        bar = '#' * int(hist[i] / max(hist) * 20)
        print(f"    {edges[i]:6.3f}-{edges[i+1]:6.3f}: {bar} ({hist[i]})")


def plot_heightmaps(maps, output_file):
    """Save the generated maps side by side as an image."""
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, len(maps), figsize=(5 * len(maps), 5))
    for ax, (title, grid) in zip(np.atleast_1d(axes), maps):
        im = ax.imshow(grid, cmap="terrain", origin="upper")
        ax.set_title(title)
        ax.set_axis_off()
        plt.colorbar(im, ax=ax, fraction=0.046)

    plt.savefig(output_file, dpi=150, bbox_inches="tight")
    print(f"\nHeightmap image saved to: {output_file}")


def main():
    """Demonstrate heightmap generation."""
    parser = argparse.ArgumentParser(description="Generate diamond-square heightmaps")
    parser.add_argument("--factor", type=int, default=7, help="Map side is 2**factor + 1")
    parser.add_argument("--seed", type=int, default=123456, help="Random seed")
    parser.add_argument(
        "--attenuated", action="store_true", help="Shrink perturbations as the step halves"
    )
    parser.add_argument("--plot", metavar="FILE", help="Save an image of the maps (needs matplotlib)")
    args = parser.parse_args()

    configure_logging(log_format="plain")

    scale_mode = ScaleMode.ATTENUATED if args.attenuated else ScaleMode.LITERAL
    print("Diamond-Square Heightmap Demo")
    print("=" * 40)

    maps = []
    for offset in (0.1, 0.5, 2.0):
        generator = HeightMapGenerator(args.factor, offset, seed=args.seed, scale_mode=scale_mode)
        print(f"\nOffset {offset} ({generator.side}x{generator.side}, {scale_mode.value}):")
        print("-" * 30)

        with Benchmark(f"Build {generator.side}x{generator.side} offset={offset}", unit="milliseconds"):
            generator.build()

        print_statistics(generator.get_map())
        maps.append((f"offset={offset}", generator.get_grid()))

    if args.plot:
        plot_heightmaps(maps, args.plot)


if __name__ == "__main__":
    main()
