# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.

"""Locating the grid cells that contain a list of sites."""

import warnings
from typing import Any, Dict, List, Optional

import cartopy.crs as ccrs
import numpy as np
from cartopy.crs import CRS

from projgrid import BasePlugin
from projgrid.constants import SITE_X_COORDINATE, SITE_Y_COORDINATE
from projgrid.grid import ProjectedGrid
from projgrid.positions import GridCoordinates2D


class GridIndexFinder(BasePlugin):
    """
    For each of a list of sites, find the index of the grid cell the site
    falls in. Sites outside the grid are given no index and reported in a
    single warning.
    """

    def __init__(
        self,
        site_coordinate_system: CRS = ccrs.PlateCarree(),
        site_x_coordinate: str = SITE_X_COORDINATE,
        site_y_coordinate: str = SITE_Y_COORDINATE,
    ) -> None:
        """
        Args:
            site_coordinate_system:
                The coordinate system of the site coordinates that will be
                provided. This defaults to be a latitude/longitude grid, a
                PlateCarree projection.
            site_x_coordinate:
                The key that identifies site x coordinates in the provided site
                dictionary. Defaults to longitude.
            site_y_coordinate:
                The key that identifies site y coordinates in the provided site
                dictionary. Defaults to latitude.
        """
        self.site_coordinate_system = site_coordinate_system
        self.site_x_coordinate = site_x_coordinate
        self.site_y_coordinate = site_y_coordinate

    def __repr__(self) -> str:
        """Represent the configured plugin instance as a string."""
        return (
            "<GridIndexFinder: site_coordinate_system: {}, "
            "site_x_coordinate: {}, site_y_coordinate: {}>"
        ).format(
            self.site_coordinate_system.__class__,
            self.site_x_coordinate,
            self.site_y_coordinate,
        )

    def process(
        self, sites: List[Dict[str, Any]], grid: ProjectedGrid
    ) -> List[Optional[GridCoordinates2D]]:
        """
        Args:
            sites:
                A list of dictionaries defining the sites, e.g.:

                   [{'altitude': 11.0, 'latitude': 57.867000579833984,
                    'longitude': -5.632999897003174, 'wmo_id': 3034}]

            grid:
                The grid to locate the sites on.

        Returns:
            The grid index of each site, in the order given, or None for a
            site outside the grid.

        Raises:
            KeyError: If a site is missing one of the coordinate keys.
        """
        if not sites:
            return []

        try:
            x_points = np.array([site[self.site_x_coordinate] for site in sites])
            y_points = np.array([site[self.site_y_coordinate] for site in sites])
        except KeyError as err:
            raise KeyError(
                f"Site is missing the coordinate key {err}; expected "
                f"'{self.site_x_coordinate}' and '{self.site_y_coordinate}'"
            )

        x_indices, y_indices = grid.find_indices(
            x_points, y_points, crs=self.site_coordinate_system
        )

        outside = np.flatnonzero(x_indices < 0)
        if outside.size > 0:
            msg = (
                "{} sites fall outside the grid domain and have no grid index. "
                "These sites are:\n".format(outside.size)
            )
            for index in outside:
                msg += "{}\n".format(sites[index])
            warnings.warn(msg)

        return [
            None if x_index < 0 else GridCoordinates2D(int(x_index), int(y_index))
            for x_index, y_index in zip(x_indices, y_indices)
        ]
