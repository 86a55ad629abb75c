# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Grid cells and their geographic footprints."""

from typing import TYPE_CHECKING, Any, Dict, Tuple

import numpy as np
from cartopy.crs import CRS
from numpy import ndarray

from projgrid.positions import GridCoordinates2D, HorizontalPosition

if TYPE_CHECKING:
    from projgrid.grid import ProjectedGrid


class CellFootprint:
    """
    The quadrilateral covered by one grid cell, in the geographic reference
    system of the grid.

    The vertices are the four cell corners, each transformed from the
    projected system independently, in the order low-x/low-y, high-x/low-y,
    high-x/high-y, low-x/high-y.

    Containment is not a point in polygon test. A point is inside the
    footprint if and only if the owning grid finds the point in this cell,
    so a footprint always agrees with the grid's own index lookup even where
    the projection bends the true cell edges away from the vertices.
    """

    __slots__ = ("_grid", "grid_coordinates", "vertices")

    def __init__(
        self,
        grid: "ProjectedGrid",
        grid_coordinates: GridCoordinates2D,
        vertices: Tuple[HorizontalPosition, ...],
    ) -> None:
        self._grid = grid
        self.grid_coordinates = grid_coordinates
        self.vertices = tuple(vertices)

    def __repr__(self) -> str:
        vertices = ", ".join(f"({v.x:.6g}, {v.y:.6g})" for v in self.vertices)
        return f"<CellFootprint: {vertices}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, CellFootprint):
            return NotImplemented
        return (
            self.grid_coordinates == other.grid_coordinates
            and self.vertices == other.vertices
        )

    def __hash__(self) -> int:
        return hash((self.grid_coordinates, self.vertices))

    @property
    def crs(self) -> CRS:
        return self._grid.coordinate_reference_system

    def contains(self, x: float, y: float) -> bool:
        """
        Args:
            x:
                Longitude of the point.
            y:
                Latitude of the point.

        Returns:
            True if the grid places the point in this footprint's cell.
        """
        found = self._grid.find_index_of(HorizontalPosition(x, y, self.crs))
        return found is not None and found == self.grid_coordinates


class GridCell:
    """A single cell of a projected grid: its index, centre and footprint."""

    __slots__ = ("grid", "grid_coordinates", "centre", "footprint")

    def __init__(
        self,
        grid: "ProjectedGrid",
        grid_coordinates: GridCoordinates2D,
        centre: HorizontalPosition,
        footprint: CellFootprint,
    ) -> None:
        self.grid = grid
        self.grid_coordinates = grid_coordinates
        self.centre = centre
        self.footprint = footprint

    def __repr__(self) -> str:
        return (
            f"<GridCell: x: {self.grid_coordinates.x}, y: {self.grid_coordinates.y}, "
            f"centre: ({self.centre.x:.6g}, {self.centre.y:.6g})>"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, GridCell):
            return NotImplemented
        return (
            self.grid_coordinates == other.grid_coordinates
            and self.centre == other.centre
            and self.footprint == other.footprint
        )

    def __hash__(self) -> int:
        return hash((self.grid_coordinates, self.centre))

    def contains(self, position: HorizontalPosition) -> bool:
        """Whether the owning grid places the position in this cell."""
        return self.grid.find_index_of(position) == self.grid_coordinates

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready description of the cell."""
        return {
            "x_index": int(self.grid_coordinates.x),
            "y_index": int(self.grid_coordinates.y),
            "centre": [self.centre.x, self.centre.y],
            "footprint": [[vertex.x, vertex.y] for vertex in self.footprint.vertices],
        }


def _cell_geometry(
    grid: "ProjectedGrid", rows: ndarray, columns: ndarray
) -> Tuple[ndarray, ndarray]:
    """
    Transform the centres and corners of a set of cells to longitude and
    latitude in batches.

    Args:
        grid:
            The grid the cells belong to.
        rows:
            Y axis indices of the cells.
        columns:
            X axis indices of the cells, the same shape as rows.

    Returns:
        - Array of shape rows.shape + (2,) of centre longitude/latitude
        - Array of shape rows.shape + (4, 2) of corner longitude/latitude,
          corners in footprint winding order
    """
    x_values = grid.x_axis.values[columns]
    y_values = grid.y_axis.values[rows]
    centre_lons, centre_lats = grid.projection.points_to_lon_lat(x_values, y_values)
    centres = np.stack([centre_lons, centre_lats], axis=-1)

    x_low = grid.x_axis.lower_bounds()[columns]
    x_high = grid.x_axis.upper_bounds()[columns]
    y_low = grid.y_axis.lower_bounds()[rows]
    y_high = grid.y_axis.upper_bounds()[rows]
    corners = []
    for corner_x, corner_y in (
        (x_low, y_low),
        (x_high, y_low),
        (x_high, y_high),
        (x_low, y_high),
    ):
        lons, lats = grid.projection.points_to_lon_lat(corner_x, corner_y)
        corners.append(np.stack([lons, lats], axis=-1))
    return centres, np.stack(corners, axis=-2)


def _assemble_cell(
    grid: "ProjectedGrid", row: int, column: int, centre: ndarray, corners: ndarray
) -> GridCell:
    crs = grid.coordinate_reference_system
    grid_coordinates = GridCoordinates2D(int(column), int(row))
    vertices = tuple(
        HorizontalPosition(float(lon), float(lat), crs) for lon, lat in corners
    )
    return GridCell(
        grid,
        grid_coordinates,
        HorizontalPosition(float(centre[0]), float(centre[1]), crs),
        CellFootprint(grid, grid_coordinates, vertices),
    )


def build_grid_cell(grid: "ProjectedGrid", i: int, j: int) -> GridCell:
    """
    Construct a single cell of a grid.

    Args:
        grid:
            The owning grid.
        i:
            Row (y axis) index.
        j:
            Column (x axis) index.

    Returns:
        The grid cell.

    Raises:
        IndexError: If either index is out of range.
        TypeError: If either index is not an integer.
    """
    i, j = grid.check_cell_index(i, j)
    centres, corners = _cell_geometry(grid, np.array([i]), np.array([j]))
    return _assemble_cell(grid, i, j, centres[0], corners[0])


def build_cell_table(grid: "ProjectedGrid") -> ndarray:
    """
    Construct every cell of a grid.

    Args:
        grid:
            The owning grid.

    Returns:
        Read-only object array of shape (y_size, x_size) holding the cells,
        so that flattening it gives the cells with x varying fastest.
    """
    rows, columns = np.meshgrid(
        np.arange(grid.y_size), np.arange(grid.x_size), indexing="ij"
    )
    centres, corners = _cell_geometry(grid, rows, columns)
    table = np.empty((grid.y_size, grid.x_size), dtype=object)
    for row, column in np.ndindex(table.shape):
        table[row, column] = _assemble_cell(
            grid, row, column, centres[row, column], corners[row, column]
        )
    table.flags.writeable = False
    return table
