# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Utilities for comparing reference systems and moving positions between them."""

from typing import Optional

import numpy as np
from cartopy.crs import CRS
from numpy import ndarray
from pyproj.exceptions import ProjError

from projgrid.positions import HorizontalPosition


class UnsupportedReferenceSystemError(ValueError):
    """Raised when a position cannot be re-expressed in a reference system."""


def crs_match(crs_a: Optional[CRS], crs_b: Optional[CRS]) -> bool:
    """
    Test whether two cartopy reference systems describe the same system.

    Args:
        crs_a:
            First reference system.
        crs_b:
            Second reference system.

    Returns:
        True if both are defined and equal.
    """
    if crs_a is None or crs_b is None:
        return False
    return crs_a is crs_b or crs_a == crs_b


def transform_points(
    x_points: ndarray, y_points: ndarray, source_crs: CRS, target_crs: CRS
) -> ndarray:
    """
    Transform arrays of coordinates from one reference system to another.
    Cartopy returns a z-coordinate which we do not want, so only the first
    two columns of the last dimension are returned.

    Args:
        x_points:
            Array of x coordinates in the source system.
        y_points:
            Array of y coordinates in the source system, the same shape as
            x_points.
        source_crs:
            Reference system the points are currently in.
        target_crs:
            Reference system to express the points in.

    Returns:
        Array of shape x_points.shape + (2,) holding transformed x and y.
        Points outside the domain of either system are returned as
        non-finite values.

    Raises:
        UnsupportedReferenceSystemError:
            If either system is not a cartopy CRS or the transformation
            between them is not available.
    """
    for crs in (source_crs, target_crs):
        if not isinstance(crs, CRS):
            raise UnsupportedReferenceSystemError(
                f"Expected a cartopy coordinate reference system, got {crs!r}"
            )
    x_points = np.asarray(x_points, dtype=np.float64)
    y_points = np.asarray(y_points, dtype=np.float64)
    try:
        points = target_crs.transform_points(source_crs, x_points, y_points)
    except ProjError as err:
        msg = (
            f"Unable to transform from {type(source_crs).__name__} to "
            f"{type(target_crs).__name__}: "
        )
        raise UnsupportedReferenceSystemError(msg + str(err))
    return points[..., :2]


def transform_position(
    position: HorizontalPosition, target_crs: CRS
) -> HorizontalPosition:
    """
    Re-express a position in another reference system.

    Args:
        position:
            The position to transform.
        target_crs:
            The reference system required.

    Returns:
        The position in target_crs. If the systems already match the
        position is returned unchanged.

    Raises:
        UnsupportedReferenceSystemError:
            If the position has no usable reference system or the
            transformation is not available.
    """
    if crs_match(position.crs, target_crs):
        return position
    points = transform_points(
        np.array([position.x]), np.array([position.y]), position.crs, target_crs
    )
    return HorizontalPosition(float(points[0, 0]), float(points[0, 1]), target_crs)
