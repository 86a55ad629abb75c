# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Map projection wrapper used to move between grid and geographic coordinates."""

from typing import Tuple

import cartopy.crs as ccrs
from cartopy.crs import CRS
from iris.coord_systems import CoordSystem
from numpy import ndarray

from projgrid.constants import X_AXIS, Y_AXIS
from projgrid.positions import WGS84
from projgrid.utilities.crs import transform_points

# Projections whose x coordinate is a longitude in degrees
LONGITUDE_CRS_TYPES = (ccrs.RotatedPole, ccrs.PlateCarree)


class Projection:
    """
    The projected coordinate reference system of a grid, with forward
    (projected x/y to longitude/latitude) and inverse transforms.
    """

    def __init__(self, crs: CRS) -> None:
        """
        Args:
            crs:
                Cartopy reference system the grid axes are defined in.

        Raises:
            TypeError: If crs is not a cartopy CRS.
        """
        if not isinstance(crs, CRS):
            raise TypeError(f"Projection requires a cartopy CRS, not {type(crs)}")
        self.crs = crs

    @classmethod
    def from_coord_system(cls, coord_system: CoordSystem) -> "Projection":
        """Create a projection from an iris coordinate system."""
        return cls(coord_system.as_cartopy_crs())

    def __repr__(self) -> str:
        """Represent the projection as a string."""
        return f"<Projection: {type(self.crs).__name__}>"

    def __eq__(self, other) -> bool:
        return isinstance(other, Projection) and self.crs == other.crs

    def __hash__(self) -> int:
        return hash(self.crs)

    def is_longitude_axis(self, axis: str) -> bool:
        """
        Whether the given axis of this projection is itself a longitude and
        so wraps. The x axis of a rotated pole, plate carree or geodetic
        system is; y never is.

        Args:
            axis:
                "x" or "y".

        Raises:
            ValueError: If the axis is not recognised.
        """
        axis = axis.lower()
        if axis not in (X_AXIS, Y_AXIS):
            raise ValueError(f"Axis {axis} not recognised, expected 'x' or 'y'")
        if axis == Y_AXIS:
            return False
        return isinstance(self.crs, LONGITUDE_CRS_TYPES) or self.crs.is_geodetic()

    def points_to_lon_lat(
        self, x_points: ndarray, y_points: ndarray
    ) -> Tuple[ndarray, ndarray]:
        """
        Forward transform arrays of projected coordinates.

        Args:
            x_points:
                Projected x coordinates.
            y_points:
                Projected y coordinates, the same shape as x_points.

        Returns:
            - Longitudes, the same shape as the inputs
            - Latitudes, the same shape as the inputs
        """
        points = transform_points(x_points, y_points, self.crs, WGS84)
        return points[..., 0], points[..., 1]

    def points_from_lon_lat(
        self, longitudes: ndarray, latitudes: ndarray
    ) -> Tuple[ndarray, ndarray]:
        """
        Inverse transform arrays of longitudes and latitudes.

        Returns:
            - Projected x coordinates
            - Projected y coordinates
        """
        points = transform_points(longitudes, latitudes, WGS84, self.crs)
        return points[..., 0], points[..., 1]

    def to_lon_lat(self, x: float, y: float) -> Tuple[float, float]:
        """Forward transform a single projected point to (longitude, latitude)."""
        lons, lats = self.points_to_lon_lat([x], [y])
        return float(lons[0]), float(lats[0])

    def from_lon_lat(self, longitude: float, latitude: float) -> Tuple[float, float]:
        """Inverse transform a single geographic point to projected (x, y)."""
        x_points, y_points = self.points_from_lon_lat([longitude], [latitude])
        return float(x_points[0]), float(y_points[0])
