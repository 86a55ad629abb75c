# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Module to contain generally useful constants."""

#: Period (degrees) at which a longitude axis wraps
LONGITUDE_PERIOD = 360.0

#: Axis roles understood by a projection
X_AXIS = "x"
Y_AXIS = "y"

#: Default keys identifying site coordinates in a site dictionary
SITE_X_COORDINATE = "longitude"
SITE_Y_COORDINATE = "latitude"
