# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""
Unit tests for cube setup functions
"""

import unittest

import numpy as np

from projgrid.grids import GLOBAL_GRID_CCRS, ROTATED_GRID_CCRS, STANDARD_GRID_CCRS
from projgrid.synthetic_data.set_up_test_cubes import (
    construct_yx_coords,
    set_up_grid_cube,
)


class Test_construct_yx_coords(unittest.TestCase):
    """Test the construct_yx_coords method"""

    def test_lat_lon(self):
        """Test coordinates created for a lat-lon grid"""
        y_coord, x_coord = construct_yx_coords(4, 3, "latlon")
        self.assertEqual(y_coord.name(), "latitude")
        self.assertEqual(x_coord.name(), "longitude")
        for crd in [y_coord, x_coord]:
            self.assertEqual(crd.units, "degrees")
            self.assertEqual(crd.dtype, np.float64)
            self.assertEqual(crd.coord_system, GLOBAL_GRID_CCRS)
        self.assertEqual(len(y_coord.points), 4)
        self.assertEqual(len(x_coord.points), 3)

    def test_proj_xy(self):
        """Test coordinates created for an equal area grid"""
        y_coord, x_coord = construct_yx_coords(4, 3, "equalarea")
        self.assertEqual(y_coord.name(), "projection_y_coordinate")
        self.assertEqual(x_coord.name(), "projection_x_coordinate")
        for crd in [y_coord, x_coord]:
            self.assertEqual(crd.units, "metres")
            self.assertEqual(crd.coord_system, STANDARD_GRID_CCRS)
        np.testing.assert_array_almost_equal(x_coord.points, [-2000.0, 0.0, 2000.0])

    def test_rotated(self):
        """Test coordinates created for a rotated pole grid"""
        y_coord, x_coord = construct_yx_coords(3, 3, "rotated")
        self.assertEqual(x_coord.name(), "grid_longitude")
        self.assertEqual(x_coord.coord_system, ROTATED_GRID_CCRS)
        np.testing.assert_array_almost_equal(y_coord.points, [-1.0, 0.0, 1.0])

    def test_domain_corner_and_spacing(self):
        """Test the grid starts at the corner with the requested spacing"""
        y_coord, x_coord = construct_yx_coords(
            2, 3, "latlon", x_grid_spacing=10, y_grid_spacing=5, domain_corner=(0, 0)
        )
        np.testing.assert_array_almost_equal(x_coord.points, [0.0, 10.0, 20.0])
        np.testing.assert_array_almost_equal(y_coord.points, [0.0, 5.0])
        self.assertTrue(x_coord.has_bounds())

    def test_single_point(self):
        """Test a single point coordinate has no bounds"""
        y_coord, _ = construct_yx_coords(1, 3, "latlon")
        self.assertFalse(y_coord.has_bounds())

    def test_error_unrecognised(self):
        """Test an unrecognised grid type raises"""
        with self.assertRaisesRegex(ValueError, "Grid type cartesian not recognised"):
            construct_yx_coords(3, 3, "cartesian")


class Test_set_up_grid_cube(unittest.TestCase):
    """Test the set_up_grid_cube function"""

    def test_basic(self):
        """Test a y-x ordered cube of zeros is created"""
        cube = set_up_grid_cube(3, 4)
        self.assertEqual(cube.name(), "land_binary_mask")
        self.assertEqual(cube.shape, (3, 4))
        self.assertEqual(cube.coord_dims("projection_y_coordinate"), (0,))
        self.assertEqual(cube.coord_dims("projection_x_coordinate"), (1,))
        self.assertFalse(np.any(cube.data))
        self.assertEqual(cube.coord_system(), STANDARD_GRID_CCRS)

    def test_name(self):
        """Test the cube can be renamed"""
        cube = set_up_grid_cube(2, 2, spatial_grid="rotated", name="surface_altitude")
        self.assertEqual(cube.name(), "surface_altitude")
        self.assertEqual(cube.coord_system(), ROTATED_GRID_CCRS)


if __name__ == "__main__":
    unittest.main()
