# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Unit tests for grid cells, footprints and the cell builders."""

import unittest

import numpy as np
import pytest

from projgrid.cell import CellFootprint, GridCell, build_cell_table, build_grid_cell
from projgrid.grid import ProjectedGrid
from projgrid.positions import WGS84, GridCoordinates2D, HorizontalPosition
from projgrid.synthetic_data.set_up_test_cubes import set_up_grid_cube


class Test_build_grid_cell(unittest.TestCase):
    """Test building a single cell."""

    def setUp(self):
        """Set up a projected grid."""
        self.grid = ProjectedGrid.from_cube(
            set_up_grid_cube(3, 4, spatial_grid="equalarea")
        )

    def test_matches_table(self):
        """Test each cell built alone matches the one in the cell table."""
        table = build_cell_table(self.grid)
        for i, j in np.ndindex(table.shape):
            cell = build_grid_cell(self.grid, i, j)
            expected = table[i, j]
            self.assertEqual(cell.grid_coordinates, expected.grid_coordinates)
            np.testing.assert_allclose(cell.centre[:2], expected.centre[:2])
            np.testing.assert_allclose(
                [v[:2] for v in cell.footprint.vertices],
                [v[:2] for v in expected.footprint.vertices],
            )

    def test_grid_coordinates(self):
        """Test the row index is y and the column index is x."""
        cell = build_grid_cell(self.grid, 2, 1)
        self.assertEqual(cell.grid_coordinates, GridCoordinates2D(x=1, y=2))
        self.assertIs(cell.grid, self.grid)

    def test_out_of_range(self):
        """Test an index past the edge of the grid raises."""
        with self.assertRaisesRegex(IndexError, "out of range"):
            build_grid_cell(self.grid, 3, 0)

    def test_centre_origin(self):
        """Test the cell at the projection origin is centred on its
        longitude and latitude."""
        grid = ProjectedGrid.from_cube(set_up_grid_cube(3, 3, spatial_grid="equalarea"))
        cell = build_grid_cell(grid, 1, 1)
        self.assertAlmostEqual(cell.centre.x, -2.5, places=4)
        self.assertAlmostEqual(cell.centre.y, 54.9, places=4)

    def test_footprint_vertices(self):
        """Test the footprint corners of an equal area cell are its projected
        bounds transformed to longitude/latitude, ordered anticlockwise from
        the lower left."""
        projection = self.grid.projection
        for i, j in ((0, 0), (1, 2), (2, 3)):
            x_bounds = self.grid.x_axis.coordinate_bounds(j)
            y_bounds = self.grid.y_axis.coordinate_bounds(i)
            expected = [
                projection.to_lon_lat(x_bounds.low, y_bounds.low),
                projection.to_lon_lat(x_bounds.high, y_bounds.low),
                projection.to_lon_lat(x_bounds.high, y_bounds.high),
                projection.to_lon_lat(x_bounds.low, y_bounds.high),
            ]
            cell = build_grid_cell(self.grid, i, j)
            self.assertEqual(len(cell.footprint.vertices), 4)
            np.testing.assert_allclose(
                [vertex[:2] for vertex in cell.footprint.vertices], expected
            )
            self.assertTrue(all(v.crs is WGS84 for v in cell.footprint.vertices))

    def test_fractional_index(self):
        """Test a fractional index is rejected rather than truncated."""
        with self.assertRaises(TypeError):
            build_grid_cell(self.grid, 1.5, 0)

    def test_numpy_index(self):
        """Test numpy integer indices are accepted."""
        cell = build_grid_cell(self.grid, np.int64(2), np.int32(1))
        self.assertEqual(cell.grid_coordinates, GridCoordinates2D(x=1, y=2))
        self.assertIs(cell.centre.crs, WGS84)


class Test_build_cell_table(unittest.TestCase):
    """Test building every cell at once."""

    def test_basic(self):
        """Test the table is a read-only object array of cells."""
        grid = ProjectedGrid.from_coordinates(
            [0.0, 10.0, 20.0], [0.0, 5.0], WGS84
        )
        table = build_cell_table(grid)
        self.assertEqual(table.shape, (2, 3))
        self.assertEqual(table.dtype, object)
        self.assertFalse(table.flags.writeable)
        self.assertTrue(all(isinstance(cell, GridCell) for cell in table.ravel()))
        self.assertEqual(table[1, 2].grid_coordinates, (2, 1))


def test_footprint_equality(identity_grid):
    """Test footprints compare on their index and vertices, not their grid."""
    vertices = (HorizontalPosition(0.0, 0.0), HorizontalPosition(1.0, 0.0))
    other_grid = ProjectedGrid.from_coordinates([0.0, 1.0], [0.0, 1.0], WGS84)
    first = CellFootprint(identity_grid, GridCoordinates2D(0, 0), vertices)
    second = CellFootprint(other_grid, GridCoordinates2D(0, 0), list(vertices))
    assert first == second
    assert hash(first) == hash(second)
    assert first != CellFootprint(identity_grid, GridCoordinates2D(1, 0), vertices)
    assert first.crs is WGS84


def test_cell_repr(identity_grid):
    """Test the string representations of a cell and its footprint."""
    cell = identity_grid.cell_at(0, 1)
    assert repr(cell) == "<GridCell: x: 1, y: 0, centre: (10, 0)>"
    assert repr(cell.footprint) == (
        "<CellFootprint: (5, -2.5), (15, -2.5), (15, 2.5), (5, 2.5)>"
    )


def test_cell_contains(identity_grid):
    """Test a cell contains the positions its grid places in it."""
    cell = identity_grid.cell_at(1, 2)
    assert cell.contains(HorizontalPosition(20.0, 5.0))
    assert not cell.contains(HorizontalPosition(10.0, 5.0))
    assert not cell.contains(HorizontalPosition(40.0, 5.0))


def test_to_dict(identity_grid):
    """Test the JSON-ready form of a cell."""
    result = identity_grid.cell_at(1, 0).to_dict()
    assert result["x_index"] == 0
    assert result["y_index"] == 1
    assert result["centre"] == pytest.approx([0.0, 5.0])
    np.testing.assert_allclose(
        result["footprint"], [[-5.0, 2.5], [5.0, 2.5], [5.0, 7.5], [-5.0, 7.5]]
    )


if __name__ == "__main__":
    unittest.main()
