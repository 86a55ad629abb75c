# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Module containing plugin base class."""

from abc import ABC, abstractmethod
from importlib.metadata import PackageNotFoundError, version
from typing import Any

try:
    __version__ = version("projgrid")
except PackageNotFoundError:
    # package is not installed
    pass


class BasePlugin(ABC):
    """An abstract class for projgrid plugins.
    Subclasses must be callable. We preserve the process
    method by redirecting to __call__.
    """

    def __call__(self, *args, **kwargs):
        """Makes subclasses callable to use process
        Args:
            *args:
                Positional arguments.
            **kwargs:
                Keyword arguments.
        Returns:
            Output of self.process()
        """
        return self.process(*args, **kwargs)

    @abstractmethod
    def process(self, *args, **kwargs) -> Any:
        """Abstract class for rest to implement."""
        pass
