# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""One dimensional coordinate axes of a regular horizontal grid."""

import operator
from typing import Optional, Union

import numpy as np
from iris.coords import DimCoord
from numpy import ndarray

from projgrid.constants import LONGITUDE_PERIOD
from projgrid.positions import Extent


class ReferenceableAxis:
    """
    An ordered, strictly monotonic set of coordinate values along one
    dimension of a grid.

    Each value owns the interval between the midpoints to its neighbours.
    At either end of the axis the interval is extrapolated by half of the
    adjacent spacing. Intervals are half-open, [low, high), in numeric
    terms whichever way the axis runs.

    A longitude axis wraps: query values are first brought into a window
    one period wide whose seam lies midway across the gap between the
    largest value and the smallest value plus one period.
    """

    def __init__(
        self,
        values: Union[ndarray, list],
        is_longitude: bool = False,
        period: float = LONGITUDE_PERIOD,
        name: Optional[str] = None,
    ) -> None:
        """
        Args:
            values:
                Coordinate values, strictly ascending or strictly descending.
            is_longitude:
                If True the axis wraps with the given period.
            period:
                Period at which a longitude axis wraps.
            name:
                Optional name of the axis, for display only.

        Raises:
            ValueError: If the values are empty, not one dimensional, not
                finite or not strictly monotonic.
            ValueError: If a wrapping axis is given a non-positive period.
        """
        values = np.array(values, dtype=np.float64)
        if values.ndim != 1 or values.size == 0:
            raise ValueError(
                "Axis values must be a non-empty one dimensional sequence, "
                f"got shape {values.shape}"
            )
        if not np.all(np.isfinite(values)):
            raise ValueError("Axis values must all be finite")
        diffs = np.diff(values)
        if not (np.all(diffs > 0) or np.all(diffs < 0)):
            raise ValueError("Axis values are not strictly monotonic")
        if is_longitude and not period > 0:
            raise ValueError(f"Longitude axis period must be positive, got {period}")

        values.flags.writeable = False
        self._values = values
        self._ascending = values.size == 1 or bool(diffs[0] > 0)
        self._edges = self._calculate_edges(values)
        self.is_longitude = is_longitude
        self.period = float(period)
        self.name = name

    def __repr__(self) -> str:
        """Represent the configured axis as a string."""
        return (
            f"<ReferenceableAxis: name: {self.name}, size: {self.size()}, "
            f"extent: {tuple(self.coordinate_extent())}, "
            f"is_longitude: {self.is_longitude}>"
        )

    def __len__(self) -> int:
        return self.size()

    @staticmethod
    def _calculate_edges(values: ndarray) -> ndarray:
        """Cell edges in the same order as the values, one more than the
        number of values. A single value has zero width."""
        if values.size == 1:
            edges = np.array([values[0], values[0]])
        else:
            midpoints = 0.5 * (values[:-1] + values[1:])
            first = values[0] - 0.5 * (values[1] - values[0])
            last = values[-1] + 0.5 * (values[-1] - values[-2])
            edges = np.concatenate(([first], midpoints, [last]))
        edges.flags.writeable = False
        return edges

    @property
    def values(self) -> ndarray:
        """Read-only array of the coordinate values."""
        return self._values

    @property
    def ascending(self) -> bool:
        return self._ascending

    def size(self) -> int:
        """Number of coordinate values on the axis."""
        return int(self._values.size)

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < self.size():
            raise IndexError(
                f"Index {index} is out of range for axis of size {self.size()}"
            )
        return index

    def coordinate_value(self, index: int) -> float:
        """
        Args:
            index:
                Position along the axis.

        Returns:
            The coordinate value at the index.

        Raises:
            IndexError: If the index is outside [0, size).
            TypeError: If the index is not an integer.
        """
        return float(self._values[self._check_index(index)])

    def coordinate_bounds(self, index: int) -> Extent:
        """
        Args:
            index:
                Position along the axis.

        Returns:
            The interval of coordinate values owned by the index.

        Raises:
            IndexError: If the index is outside [0, size).
            TypeError: If the index is not an integer.
        """
        index = self._check_index(index)
        first, second = self._edges[index], self._edges[index + 1]
        return Extent(float(min(first, second)), float(max(first, second)))

    def coordinate_extent(self) -> Extent:
        """The overall range of coordinate values covered by the axis."""
        first, last = self._edges[0], self._edges[-1]
        return Extent(float(min(first, last)), float(max(first, last)))

    def lower_bounds(self) -> ndarray:
        """Lower end of the interval of every index."""
        return np.minimum(self._edges[:-1], self._edges[1:])

    def upper_bounds(self) -> ndarray:
        """Upper end of the interval of every index."""
        return np.maximum(self._edges[:-1], self._edges[1:])

    def _normalise(self, values: ndarray) -> ndarray:
        """Bring values on a longitude axis into [seam, seam + period)."""
        if not self.is_longitude:
            return values
        seam = 0.5 * (self._values.min() + self._values.max() - self.period)
        return seam + np.mod(values - seam, self.period)

    def contains(self, value: float) -> bool:
        """
        Test whether a coordinate value lies within the axis extent.

        Args:
            value:
                Coordinate value. Longitude axes wrap the value first.

        Returns:
            True if the axis covers the value.
        """
        return bool(self.find_indices_of(np.array([value]))[0] >= 0)

    def find_index_of(self, value: float) -> Optional[int]:
        """
        Find the index whose interval contains the value.

        Args:
            value:
                Coordinate value. Longitude axes wrap the value first.

        Returns:
            The index, or None if the value is outside the axis extent.
        """
        index = int(self.find_indices_of(np.array([value]))[0])
        return None if index < 0 else index

    def find_indices_of(self, values: ndarray) -> ndarray:
        """
        Find the index whose interval contains each of the values. This is
        a binary search over the cell edges.

        Args:
            values:
                Array of coordinate values, any shape.

        Returns:
            Integer array of the same shape holding the index for each
            value, or -1 where the value is outside the axis extent or not
            finite.
        """
        values = self._normalise(np.asarray(values, dtype=np.float64))
        indices = np.full(values.shape, -1, dtype=np.int64)
        finite = np.isfinite(values)
        extent = self.coordinate_extent()

        if self.size() == 1:
            indices[finite & (values == extent.low)] = 0
            return indices

        inside = finite & (values >= extent.low) & (values < extent.high)
        if self._ascending:
            found = np.searchsorted(self._edges, values[inside], side="right") - 1
        else:
            # Search the reversed (ascending) edges then map back
            reversed_edges = self._edges[::-1]
            found = np.searchsorted(reversed_edges, values[inside], side="right") - 1
            found = self.size() - 1 - found
        indices[inside] = found
        return indices


def axis_from_coord(coord: DimCoord, is_longitude: bool = False) -> ReferenceableAxis:
    """
    Create an axis from an iris dimension coordinate. Coordinates with
    units that can be converted to metres are converted, as cartopy
    projections work in metres.

    Args:
        coord:
            One dimensional coordinate describing the axis.
        is_longitude:
            If True the axis wraps at 360 degrees.

    Returns:
        The axis.

    Raises:
        ValueError: If the coordinate is not one dimensional.
    """
    if coord.ndim != 1:
        raise ValueError(
            f"Coordinate {coord.name()} must be one dimensional to create an axis"
        )
    if coord.units.is_convertible("m"):
        coord = coord.copy()
        coord.convert_units("m")
    return ReferenceableAxis(coord.points, is_longitude=is_longitude, name=coord.name())
