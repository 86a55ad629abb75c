#!/usr/bin/env python
# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Script to describe the projected grid of a cube"""

from projgrid import cli


@cli.clizefy
@cli.with_output
def process(grid: cli.inputgrid, *, include_cells=False):
    """Describe the horizontal grid of a cube: its sizes, projected extent
    and geographic bounding box.

    Args:
        grid (projgrid.grid.ProjectedGrid):
            A cube file whose x and y dimension coordinates and coordinate
            system define the grid.
        include_cells (bool):
            If set, the geographic centre and footprint of every grid cell is
            included, row by row with x varying fastest.
    Returns:
        dict:
            Description of the grid.
    """
    from projgrid.summary import GridSummary

    return GridSummary(include_cells=include_cells)(grid)
