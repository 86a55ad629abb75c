# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Plugin to describe a projected grid as JSON-ready data."""

from typing import Any, Dict

from projgrid import BasePlugin
from projgrid.grid import ProjectedGrid


class GridSummary(BasePlugin):
    """Describe the size, extent and, optionally, every cell of a grid."""

    def __init__(self, include_cells: bool = False) -> None:
        """
        Args:
            include_cells:
                If True the centre and footprint of every cell is included,
                in row-major order with x varying fastest.
        """
        self.include_cells = include_cells

    def __repr__(self) -> str:
        """Represent the configured plugin instance as a string."""
        return f"<GridSummary: include_cells: {self.include_cells}>"

    def process(self, grid: ProjectedGrid) -> Dict[str, Any]:
        """
        Args:
            grid:
                The grid to describe.

        Returns:
            Dictionary of grid properties.
        """
        bbox = grid.geographic_bounding_box
        summary = {
            "projection": type(grid.native_crs).__name__,
            "proj4_params": dict(grid.native_crs.proj4_params),
            "x_size": grid.x_size,
            "y_size": grid.y_size,
            "size": grid.size(),
            "x_extent": list(grid.x_axis.coordinate_extent()),
            "y_extent": list(grid.y_axis.coordinate_extent()),
            "x_wraps": grid.x_axis.is_longitude,
            "geographic_bounding_box": bbox._asdict(),
        }
        if self.include_cells:
            summary["cells"] = [cell.to_dict() for cell in grid.iter_cells()]
        return summary
