# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""
Functions to set up gridded cubes on standard grids for unit tests and
demonstrations. The cubes carry y/x dimension coordinates with a coordinate
system, which is all a projected grid needs.
"""

from typing import Optional, Tuple

import iris
import numpy as np
from iris.coords import DimCoord
from iris.cube import Cube
from numpy import ndarray

from projgrid.grids import GRID_COORD_ATTRIBUTES


def construct_yx_coords(
    ypoints: int,
    xpoints: int,
    spatial_grid: str,
    x_grid_spacing: Optional[float] = None,
    y_grid_spacing: Optional[float] = None,
    domain_corner: Optional[Tuple[float, float]] = None,
) -> Tuple[DimCoord, DimCoord]:
    """
    Construct y/x spatial dimension coordinates

    Args:
        ypoints:
            Number of grid points required along the y-axis
        xpoints:
            Number of grid points required along the x-axis
        spatial_grid:
            Specifier to produce a "latlon", "equalarea" or "rotated" grid
        x_grid_spacing:
            Grid resolution along the x axis. Degrees for latlon and rotated or
            metres for equalarea. If not provided, the default spacing for the
            grid type is used.
        y_grid_spacing:
            Grid resolution along the y axis, as for x_grid_spacing.
        domain_corner:
            Bottom left corner of grid domain (y,x). If not provided, a grid is
            created centred around (0,0).

    Returns:
        Tuple containing y and x iris.coords.DimCoords

    Raises:
        ValueError: If the grid type is not recognised.
    """
    if spatial_grid not in GRID_COORD_ATTRIBUTES.keys():
        raise ValueError("Grid type {} not recognised".format(spatial_grid))
    attributes = GRID_COORD_ATTRIBUTES[spatial_grid]

    if x_grid_spacing is None:
        x_grid_spacing = attributes["default_grid_spacing"]
    if y_grid_spacing is None:
        y_grid_spacing = attributes["default_grid_spacing"]

    if domain_corner is None:
        domain_corner = _set_domain_corner(
            ypoints, xpoints, x_grid_spacing, y_grid_spacing
        )
    y_array, x_array = _create_yx_arrays(
        ypoints, xpoints, domain_corner, x_grid_spacing, y_grid_spacing
    )

    y_coord = DimCoord(
        y_array,
        attributes["yname"],
        units=attributes["units"],
        coord_system=attributes["coord_system"],
    )
    x_coord = DimCoord(
        x_array,
        attributes["xname"],
        units=attributes["units"],
        coord_system=attributes["coord_system"],
    )

    # add bounds on spatial coordinates
    if ypoints > 1:
        y_coord.guess_bounds()
    if xpoints > 1:
        x_coord.guess_bounds()

    return y_coord, x_coord


def _create_yx_arrays(
    ypoints: int,
    xpoints: int,
    domain_corner: Tuple[float, float],
    x_grid_spacing: float,
    y_grid_spacing: float,
) -> Tuple[ndarray, ndarray]:
    """
    Creates arrays for constructing y and x DimCoords.

    Returns:
        Tuple containing arrays of y and x coordinate values
    """
    y_stop = domain_corner[0] + (y_grid_spacing * (ypoints - 1))
    x_stop = domain_corner[1] + (x_grid_spacing * (xpoints - 1))

    y_array = np.linspace(domain_corner[0], y_stop, ypoints, dtype=np.float64)
    x_array = np.linspace(domain_corner[1], x_stop, xpoints, dtype=np.float64)

    return y_array, x_array


def _set_domain_corner(
    ypoints: int, xpoints: int, x_grid_spacing: float, y_grid_spacing: float
) -> Tuple[float, float]:
    """
    Set domain corner to create a grid around 0,0.

    Returns:
        (y,x) values of the bottom left corner of the domain
    """
    y_start = 0 - ((ypoints - 1) * y_grid_spacing) / 2
    x_start = 0 - ((xpoints - 1) * x_grid_spacing) / 2

    return y_start, x_start


def set_up_grid_cube(
    ypoints: int,
    xpoints: int,
    spatial_grid: str = "equalarea",
    x_grid_spacing: Optional[float] = None,
    y_grid_spacing: Optional[float] = None,
    domain_corner: Optional[Tuple[float, float]] = None,
    name: str = "land_binary_mask",
) -> Cube:
    """
    Set up a 2D (y-x ordered) cube of zeros on a standard grid.

    Args:
        ypoints:
            Number of grid points along the y-axis
        xpoints:
            Number of grid points along the x-axis
        spatial_grid:
            "latlon", "equalarea" or "rotated"
        x_grid_spacing:
            Grid resolution along the x axis
        y_grid_spacing:
            Grid resolution along the y axis
        domain_corner:
            Bottom left corner of grid domain (y,x)
        name:
            Variable name (standard / long)

    Returns:
        Cube with y and x dimension coordinates
    """
    y_coord, x_coord = construct_yx_coords(
        ypoints,
        xpoints,
        spatial_grid,
        x_grid_spacing=x_grid_spacing,
        y_grid_spacing=y_grid_spacing,
        domain_corner=domain_corner,
    )
    cube = iris.cube.Cube(
        np.zeros((ypoints, xpoints), dtype=np.float32),
        units="1",
        dim_coords_and_dims=[(y_coord, 0), (x_coord, 1)],
    )
    cube.rename(name)
    return cube
