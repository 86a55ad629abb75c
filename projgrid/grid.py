# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""A regular horizontal grid defined in a projected coordinate system."""

import operator
import threading
import warnings
from typing import Iterator, Optional, Tuple, Union

import numpy as np
from cartopy.crs import CRS
from iris.cube import Cube
from numpy import ndarray

from projgrid.axis import ReferenceableAxis, axis_from_coord
from projgrid.cell import GridCell, build_cell_table
from projgrid.constants import X_AXIS, Y_AXIS
from projgrid.positions import (
    WGS84,
    BoundingBox,
    GeographicBoundingBox,
    GridCoordinates2D,
    HorizontalPosition,
)
from projgrid.projection import Projection
from projgrid.utilities.crs import crs_match, transform_points, transform_position


class ProjectedGrid:
    """
    A two-dimensional grid whose x and y axes are defined in the coordinate
    system of a map projection.

    Positions are reported, and by default queried, in geographic WGS84
    longitude/latitude. A query position in any other reference system is
    transformed into the projected system of the axes before lookup.

    Grid cells are built together, on first access, and kept for the life
    of the grid. Everything else is fixed at construction, so a grid can be
    shared between threads.
    """

    def __init__(
        self,
        x_axis: ReferenceableAxis,
        y_axis: ReferenceableAxis,
        projection: Projection,
        bounding_box: Optional[BoundingBox] = None,
    ) -> None:
        """
        Args:
            x_axis:
                Axis of projected x coordinates (the grid columns).
            y_axis:
                Axis of projected y coordinates (the grid rows).
            projection:
                The projection the axes are defined in.
            bounding_box:
                Precomputed geographic bounding box of the grid. If not
                given, one is derived from the edge of the grid.

        Raises:
            TypeError: If the axes or projection are of the wrong type.
            ValueError: If the bounding box is not geographic.
        """
        for name, axis in (("x_axis", x_axis), ("y_axis", y_axis)):
            if not isinstance(axis, ReferenceableAxis):
                raise TypeError(f"{name} must be a ReferenceableAxis, not {type(axis)}")
        if not isinstance(projection, Projection):
            raise TypeError(f"projection must be a Projection, not {type(projection)}")

        self._x_axis = x_axis
        self._y_axis = y_axis
        self._projection = projection

        if bounding_box is None:
            bounding_box = self._calculate_bounding_box()
        elif not crs_match(bounding_box.crs, self.coordinate_reference_system):
            raise ValueError("Bounding box must be in geographic WGS84 coordinates")
        self._bounding_box = bounding_box

        self._cells = None
        self._cells_lock = threading.Lock()

    @classmethod
    def from_coordinates(
        cls,
        x_points: Union[ndarray, list],
        y_points: Union[ndarray, list],
        crs: CRS,
        bounding_box: Optional[BoundingBox] = None,
    ) -> "ProjectedGrid":
        """
        Create a grid from raw axis values and the reference system they are
        in. The x axis wraps if the projection says it is a longitude.

        Args:
            x_points:
                Projected x coordinate values.
            y_points:
                Projected y coordinate values.
            crs:
                Cartopy reference system of the coordinates.
            bounding_box:
                Optional precomputed geographic bounding box.

        Returns:
            The grid.
        """
        projection = Projection(crs)
        x_axis = ReferenceableAxis(
            x_points, is_longitude=projection.is_longitude_axis(X_AXIS), name=X_AXIS
        )
        y_axis = ReferenceableAxis(
            y_points, is_longitude=projection.is_longitude_axis(Y_AXIS), name=Y_AXIS
        )
        return cls(x_axis, y_axis, projection, bounding_box=bounding_box)

    @classmethod
    def from_cube(
        cls, cube: Cube, bounding_box: Optional[BoundingBox] = None
    ) -> "ProjectedGrid":
        """
        Create a grid from the horizontal dimension coordinates and
        coordinate system of a cube.

        Args:
            cube:
                Cube with one dimensional x and y coordinates.
            bounding_box:
                Optional precomputed geographic bounding box.

        Returns:
            The grid.

        Raises:
            ValueError: If the cube has no coordinate system.
        """
        coord_system = cube.coord_system()
        if coord_system is None:
            raise ValueError(
                f"Cube {cube.name()} has no coordinate system to define a grid"
            )
        projection = Projection.from_coord_system(coord_system)
        x_axis = axis_from_coord(
            cube.coord(axis=X_AXIS), is_longitude=projection.is_longitude_axis(X_AXIS)
        )
        y_axis = axis_from_coord(
            cube.coord(axis=Y_AXIS), is_longitude=projection.is_longitude_axis(Y_AXIS)
        )
        return cls(x_axis, y_axis, projection, bounding_box=bounding_box)

    def __repr__(self) -> str:
        """Represent the configured grid as a string."""
        return (
            f"<ProjectedGrid: x_size: {self.x_size}, y_size: {self.y_size}, "
            f"projection: {self._projection}>"
        )

    def _calculate_bounding_box(self) -> BoundingBox:
        """
        Transform the points around the outer edge of the grid to longitude
        and latitude and take their extremes.

        A pole that lies within the grid extends the box to that pole and
        across all longitudes, as does an x axis that wraps the globe. A box
        whose edge longitudes are closest together across the antimeridian
        is returned with min_x (west) greater than max_x (east).

        Raises:
            ValueError: If no edge point can be transformed.
        """
        x_edges = np.append(self._x_axis.lower_bounds(), self._x_axis.upper_bounds()[-1])
        y_edges = np.append(self._y_axis.lower_bounds(), self._y_axis.upper_bounds()[-1])
        x_extent = self._x_axis.coordinate_extent()
        y_extent = self._y_axis.coordinate_extent()

        x_points = np.concatenate(
            [
                x_edges,
                x_edges,
                np.full(y_edges.shape, x_extent.low),
                np.full(y_edges.shape, x_extent.high),
            ]
        )
        y_points = np.concatenate(
            [
                np.full(x_edges.shape, y_extent.low),
                np.full(x_edges.shape, y_extent.high),
                y_edges,
                y_edges,
            ]
        )
        lons, lats = self._projection.points_to_lon_lat(x_points, y_points)
        valid = np.isfinite(lons) & np.isfinite(lats)
        if not valid.any():
            raise ValueError(
                "None of the grid edge points could be transformed to "
                "longitude/latitude"
            )
        if not valid.all():
            warnings.warn(
                f"{np.count_nonzero(~valid)} grid edge points could not be "
                "transformed and are excluded from the bounding box"
            )
        south = float(lats[valid].min())
        north = float(lats[valid].max())
        if (
            self._x_axis.is_longitude
            and x_extent.high - x_extent.low >= self._x_axis.period
        ):
            west, east = -180.0, 180.0
        else:
            west, east = _longitude_bounds(lons[valid])

        for pole_latitude in (90.0, -90.0):
            pole_x, pole_y = self._projection.from_lon_lat(0.0, pole_latitude)
            if self._x_axis.contains(pole_x) and self._y_axis.contains(pole_y):
                west, east = -180.0, 180.0
                if pole_latitude > 0:
                    north = pole_latitude
                else:
                    south = pole_latitude

        return BoundingBox(west, south, east, north, self.coordinate_reference_system)

    @property
    def x_axis(self) -> ReferenceableAxis:
        return self._x_axis

    @property
    def y_axis(self) -> ReferenceableAxis:
        return self._y_axis

    @property
    def projection(self) -> Projection:
        return self._projection

    @property
    def coordinate_reference_system(self) -> CRS:
        """Always geographic WGS84."""
        return WGS84

    @property
    def native_crs(self) -> CRS:
        """The projected reference system the axes are defined in."""
        return self._projection.crs

    @property
    def bounding_box(self) -> BoundingBox:
        return self._bounding_box

    @property
    def geographic_bounding_box(self) -> GeographicBoundingBox:
        return self._bounding_box.to_geographic()

    @property
    def x_size(self) -> int:
        return self._x_axis.size()

    @property
    def y_size(self) -> int:
        return self._y_axis.size()

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of the cell table, (y_size, x_size)."""
        return self.y_size, self.x_size

    def size(self) -> int:
        """Total number of cells in the grid."""
        return self.x_size * self.y_size

    def _normalise_to_grid_crs(self, position: HorizontalPosition) -> HorizontalPosition:
        """Express a position in the projected system of the grid axes."""
        return transform_position(position, self.native_crs)

    def contains(self, position: HorizontalPosition) -> bool:
        """
        Args:
            position:
                Position in any reference system cartopy can transform.

        Returns:
            True if both axes cover the position.

        Raises:
            UnsupportedReferenceSystemError:
                If the position cannot be transformed to the grid system.
        """
        position = self._normalise_to_grid_crs(position)
        return self._x_axis.contains(position.x) and self._y_axis.contains(position.y)

    def find_index_of(self, position: HorizontalPosition) -> Optional[GridCoordinates2D]:
        """
        Find the cell containing a position.

        Args:
            position:
                Position in any reference system cartopy can transform.

        Returns:
            The x (column) and y (row) index of the cell, or None if the
            position is outside the grid.

        Raises:
            UnsupportedReferenceSystemError:
                If the position cannot be transformed to the grid system.
        """
        position = self._normalise_to_grid_crs(position)
        x_index = self._x_axis.find_index_of(position.x)
        if x_index is None:
            return None
        y_index = self._y_axis.find_index_of(position.y)
        if y_index is None:
            return None
        return GridCoordinates2D(x_index, y_index)

    def find_indices(
        self, x_points: ndarray, y_points: ndarray, crs: Optional[CRS] = None
    ) -> Tuple[ndarray, ndarray]:
        """
        Find the cells containing many positions at once.

        Args:
            x_points:
                X coordinates (longitudes by default) of the positions.
            y_points:
                Y coordinates (latitudes by default) of the positions.
            crs:
                Reference system of the positions. Defaults to WGS84.

        Returns:
            - Integer array of x (column) indices
            - Integer array of y (row) indices
            Both arrays hold -1 for positions outside the grid.

        Raises:
            UnsupportedReferenceSystemError:
                If the positions cannot be transformed to the grid system.
        """
        if crs is None:
            crs = self.coordinate_reference_system
        x_points = np.asarray(x_points, dtype=np.float64)
        y_points = np.asarray(y_points, dtype=np.float64)
        if not crs_match(crs, self.native_crs):
            points = transform_points(x_points, y_points, crs, self.native_crs)
            x_points, y_points = points[..., 0], points[..., 1]
        x_indices = self._x_axis.find_indices_of(x_points)
        y_indices = self._y_axis.find_indices_of(y_points)
        outside = (x_indices < 0) | (y_indices < 0)
        x_indices[outside] = -1
        y_indices[outside] = -1
        return x_indices, y_indices

    def check_cell_index(self, i: int, j: int) -> Tuple[int, int]:
        """
        Args:
            i:
                Row (y axis) index.
            j:
                Column (x axis) index.

        Returns:
            The indices as ints.

        Raises:
            IndexError: If either index is outside the grid.
            TypeError: If either index is not an integer.
        """
        i, j = operator.index(i), operator.index(j)
        if not (0 <= i < self.y_size and 0 <= j < self.x_size):
            raise IndexError(
                f"Cell index ({i}, {j}) is out of range for grid of shape "
                f"{self.shape}"
            )
        return i, j

    @property
    def domain_objects(self) -> ndarray:
        """
        Read-only object array of shape (y_size, x_size) holding every cell
        of the grid. Built once, on first access, by a single thread; other
        threads asking at the same time wait for it to be ready.
        """
        cells = self._cells
        if cells is None:
            with self._cells_lock:
                if self._cells is None:
                    self._cells = build_cell_table(self)
                cells = self._cells
        return cells

    def cell_at(self, i: int, j: int) -> GridCell:
        """
        Args:
            i:
                Row (y axis) index.
            j:
                Column (x axis) index.

        Returns:
            The cell, whose grid coordinates are (x=j, y=i).

        Raises:
            IndexError: If either index is outside the grid.
            TypeError: If either index is not an integer.
        """
        i, j = self.check_cell_index(i, j)
        return self.domain_objects[i, j]

    def iter_cells(self) -> Iterator[GridCell]:
        """Iterate over all cells, row by row with x varying fastest."""
        return iter(self.domain_objects.ravel())


def _longitude_bounds(longitudes: ndarray) -> Tuple[float, float]:
    """
    West and east bounds of a set of longitudes, in [-180, 180]. Where the
    longitudes lie closer together across the antimeridian than across the
    prime meridian the west bound is greater than the east bound.
    """
    wrapped = np.mod(longitudes + 180.0, 360.0) - 180.0
    west, east = wrapped.min(), wrapped.max()
    shifted = np.mod(longitudes, 360.0)
    if shifted.max() - shifted.min() < east - west:
        west, east = shifted.min(), shifted.max()
        if west >= 180.0:
            west -= 360.0
        if east > 180.0:
            east -= 360.0
    return float(west), float(east)
