# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""Provides support utilities for cli scripts."""

import json
from typing import Any, Optional


def load_json_or_none(file_path: Optional[str]) -> Any:
    """If there is a path, runs json.load and returns it. Else returns None.

    Args:
        file_path:
            File path to the json file to load.

    Returns:
        The content loaded from a json file, or None.
    """
    content = None
    if file_path:
        with open(file_path, "r") as input_file:
            content = json.load(input_file)
    return content


def _json_default(obj: Any) -> Any:
    """Serialise numpy scalars as numbers."""
    if hasattr(obj, "item"):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(content: Any) -> str:
    """Render command output as indented JSON text."""
    return json.dumps(content, indent=2, default=_json_default)


def save_json(content: Any, file_path: str) -> None:
    """Write command output to a json file.

    Args:
        content:
            JSON-ready data.
        file_path:
            File path to write to.
    """
    with open(file_path, "w") as output_file:
        output_file.write(to_json(content))
