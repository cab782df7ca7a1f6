#!/usr/bin/env python
"""Create a sample point-cloud color file for testing pointlegend."""

from pointlegend.data.reader import build_dataset
from pointlegend.data.sample import make_sample_point_cloud


def create_test_file(output_path: str = "test_points.nc", n_points: int = 5000) -> None:
    """Write random point colors and their colormaps to a netCDF file."""
    data = make_sample_point_cloud(n_points=n_points)
    dataset = build_dataset(data)
    dataset.to_netcdf(output_path)

    print(f"✓ Created test file: {output_path}")
    print(f"  - Points: {n_points}")
    print(f"  - Colormaps: {', '.join(d.field for d in data.descriptors)}")
    print(f"\nYou can now run:")
    print(f"  python -m pointlegend {output_path}")


if __name__ == "__main__":
    import sys

    output = sys.argv[1] if len(sys.argv) > 1 else "test_points.nc"
    create_test_file(output)
