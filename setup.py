# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="projgrid",
        version="0.1.0",
        description="Projected horizontal grids: cell geometry and index lookup",
        license="BSD-3-Clause",
        python_requires=">=3.9",
        packages=find_packages(include=["projgrid", "projgrid.*"]),
        install_requires=[
            "numpy",
            "cartopy",
            "pyproj",
            "scitools-iris",
            "cf-units",
            "clize",
            "sigtools",
            "sphinx",
        ],
        extras_require={"test": ["pytest", "threadpoolctl"]},
        entry_points={"console_scripts": ["projgrid=projgrid.cli:run_main"]},
    )
