# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Simple value types describing positions, extents and grid indices."""

from collections import namedtuple

import cartopy.crs as ccrs

#: Reference system used for every geographic position reported by a grid.
WGS84 = ccrs.PlateCarree()

#: Index pair of a grid cell; x is the column index and y the row index.
GridCoordinates2D = namedtuple("GridCoordinates2D", "x y")

GeographicBoundingBox = namedtuple(
    "GeographicBoundingBox", "west_bound_longitude east_bound_longitude "
    "south_bound_latitude north_bound_latitude"
)


class HorizontalPosition(namedtuple("HorizontalPosition", "x y crs")):
    """A point in two dimensions, tagged with the cartopy CRS it is in.
    The CRS defaults to geographic WGS84 longitude/latitude."""

    __slots__ = ()

    def __new__(cls, x: float, y: float, crs: ccrs.CRS = WGS84):
        return super().__new__(cls, x, y, crs)


class Extent(namedtuple("Extent", "low high")):
    """A range of coordinate values, low <= high.

    Containment is half-open, [low, high), except for a degenerate extent
    where low == high, which contains that single value.
    """

    __slots__ = ()

    def contains(self, value: float) -> bool:
        """Test whether a value falls within the extent.

        Args:
            value:
                Coordinate value to test.

        Returns:
            True if the value is in the extent.
        """
        if self.low == self.high:
            return value == self.low
        return self.low <= value < self.high


class BoundingBox(
    namedtuple("BoundingBox", "min_x min_y max_x max_y crs", defaults=(WGS84,))
):
    """Axis aligned box in a given reference system.

    A geographic box that crosses the antimeridian has min_x (its west
    bound) greater than max_x (its east bound).
    """

    __slots__ = ()

    def contains(self, x: float, y: float) -> bool:
        """Inclusive test of a point against the box edges.

        If the box crosses the antimeridian, x is taken as a longitude and
        wrapped into [-180, 180) before the test.
        """
        if not self.min_y <= y <= self.max_y:
            return False
        if self.min_x <= self.max_x:
            return self.min_x <= x <= self.max_x
        x = (x + 180.0) % 360.0 - 180.0
        return x >= self.min_x or x <= self.max_x

    def to_geographic(self) -> GeographicBoundingBox:
        """Represent the box as west, east, south and north bounds."""
        return GeographicBoundingBox(self.min_x, self.max_x, self.min_y, self.max_y)
