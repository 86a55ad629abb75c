# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Module for loading grid definitions from files."""

from typing import Optional, Union

import iris
from iris import Constraint

from projgrid.grid import ProjectedGrid


def load_grid(
    filepath: str, constraints: Optional[Union[Constraint, str]] = None
) -> ProjectedGrid:
    """Load a single cube from the filepath using Iris and build a grid from
    its horizontal coordinates. Only metadata is needed, so the cube data is
    never realised.

    Args:
        filepath:
            Filepath that will be loaded.
        constraints:
            Constraint to be applied when loading from the input filepath.
            This can be in the form of an iris.Constraint or could be a string
            that is intended to match the name of the cube.

    Returns:
        Grid described by the x and y dimension coordinates of the cube.
    """
    cube = iris.load_cube(filepath, constraint=constraints)
    return ProjectedGrid.from_cube(cube)
