#!/usr/bin/env python
# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Script to find the grid cells containing a list of sites"""

from projgrid import cli
from projgrid.constants import SITE_X_COORDINATE, SITE_Y_COORDINATE


@cli.clizefy
@cli.with_output
def process(
    grid: cli.inputgrid,
    site_list: cli.inputjson,
    *,
    site_coordinate_system=None,
    site_coordinate_options=None,
    site_x_coordinate=SITE_X_COORDINATE,
    site_y_coordinate=SITE_Y_COORDINATE,
):
    """Find the index of the grid cell containing each site in a list.

    Args:
        grid (projgrid.grid.ProjectedGrid):
            A cube file whose x and y dimension coordinates and coordinate
            system define the grid.
        site_list (list of dict):
            Path to a json file containing a list of site dictionaries, each
            holding the site coordinates under the keys named by
            site_x_coordinate and site_y_coordinate.
        site_coordinate_system (str):
            The coordinate system in which the site coordinates are provided
            within the site list. This must be provided as the name of a
            cartopy coordinate system. The default is PlateCarree.
        site_coordinate_options (str):
            JSON formatted string of options passed to the cartopy coordinate
            system given in site_coordinate_system. "globe" is handled as a
            special case to construct a cartopy Globe object.
        site_x_coordinate (str):
            The key that identifies site x coordinates in the provided site
            dictionary. Defaults to longitude.
        site_y_coordinate (str):
            The key that identifies site y coordinates in the provided site
            dictionary. Defaults to latitude.

    Returns:
        list of dict:
            The sites, each with "x_index" and "y_index" added. Both are None
            for sites outside the grid.

    Raises:
        ValueError:
            If the site coordinate system is not a supported cartopy system.
    """
    import json

    import cartopy.crs as ccrs

    from projgrid.index_finding import GridIndexFinder

    PROJECTION_LIST = [
        "AlbersEqualArea",
        "AzimuthalEquidistant",
        "EuroPP",
        "Geodetic",
        "Gnomonic",
        "LambertAzimuthalEqualArea",
        "LambertConformal",
        "LambertCylindrical",
        "Mercator",
        "Miller",
        "Mollweide",
        "OSGB",
        "OSNI",
        "Orthographic",
        "PlateCarree",
        "Robinson",
        "RotatedGeodetic",
        "RotatedPole",
        "Sinusoidal",
        "Stereographic",
        "TransverseMercator",
        "UTM",
    ]

    kwargs = {
        "site_x_coordinate": site_x_coordinate,
        "site_y_coordinate": site_y_coordinate,
    }
    if site_coordinate_system is not None:
        if site_coordinate_system not in PROJECTION_LIST:
            raise ValueError(f"invalid projection {site_coordinate_system}")
        site_crs = getattr(ccrs, site_coordinate_system)
        crs_options = json.loads(site_coordinate_options or "{}")
        globe = ccrs.Globe(**crs_options.pop("globe", {}))
        kwargs["site_coordinate_system"] = site_crs(globe=globe, **crs_options)

    indices = GridIndexFinder(**kwargs)(site_list, grid)

    result = []
    for site, index in zip(site_list, indices):
        located = dict(site)
        located["x_index"] = None if index is None else index.x
        located["y_index"] = None if index is None else index.y
        result.append(located)
    return result
