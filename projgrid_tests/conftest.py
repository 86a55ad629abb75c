# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Test wide setup and configuration"""

import cartopy.crs as ccrs
import pytest

from projgrid.grid import ProjectedGrid


@pytest.fixture(autouse=True)
def thread_control(monkeypatch):
    """
    Wrap all tests with a limit to one thread via threadpoolctl.

    The threadpoolctl library handles a variety of numerical libraries including
    OpenBLAS, MKL and OpenMP, using their library specific interfaces during runtime.
    Environment variable settings for these need to be applied before starting the
    python interpreter, which is not possible from inside pytest.
    """
    try:
        from threadpoolctl import threadpool_limits

        with threadpool_limits(limits=1):
            yield
    except ModuleNotFoundError:
        yield
    return


@pytest.fixture
def identity_grid():
    """A 3x2 grid on a longitude/latitude projection, so that the forward
    transform is the identity."""
    return ProjectedGrid.from_coordinates([0.0, 10.0, 20.0], [0.0, 5.0], ccrs.PlateCarree())
