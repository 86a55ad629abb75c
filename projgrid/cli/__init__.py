# (C) Crown Copyright, Met Office. All rights reserved.
#
# This file is part of 'projgrid' and is released under the BSD 3-Clause license.
# See LICENSE in the root of the repository for full licensing details.
"""init for cli and clize"""

import shlex
from collections import OrderedDict
from functools import partial

import clize
from clize import parameters
from clize.help import ClizeHelp, HelpForAutodetectedDocstring
from clize.parser import value_converter
from clize.runner import Clize
from sigtools.wrappers import decorator

# Imports are done in their functions to make calls to -h quicker.
# selected clize imports/constants

IGNORE = clize.Parameter.IGNORE
LAST_OPTION = clize.Parameter.LAST_OPTION
REQUIRED = clize.Parameter.REQUIRED
UNDOCUMENTED = clize.Parameter.UNDOCUMENTED


# help helpers


def docutilize(obj):
    """Convert Numpy or Google style docstring into reStructuredText format.

    Args:
        obj (str or object):
            Takes an object and changes it's docstrings to a reStructuredText
            format.
    Returns:
        str or object:
            A converted string or an object with replaced docstring depending
            on the type of the input.
    """
    from inspect import cleandoc, getdoc

    from sphinx.ext.napoleon.docstring import GoogleDocstring, NumpyDocstring

    if isinstance(obj, str):
        doc = cleandoc(obj)
    else:
        doc = getdoc(obj)
    doc = str(NumpyDocstring(doc))
    doc = str(GoogleDocstring(doc))
    doc = doc.replace(":exc:", "")
    doc = doc.replace(":data:", "")
    doc = doc.replace(":keyword", ":param")
    doc = doc.replace(":kwtype", ":type")

    if isinstance(obj, str):
        return doc
    obj.__doc__ = doc
    return obj


class HelpForNapoleonDocstring(HelpForAutodetectedDocstring):
    """Subclass to add support for google style docstrings"""

    def add_docstring(self, docstring, *args, **kwargs):
        """Adds the updated docstring."""
        docstring = docutilize(docstring)
        super().add_docstring(docstring, *args, **kwargs)


class DocutilizeClizeHelp(ClizeHelp):
    """Subclass to build Napoleon docstring from subject."""

    def __init__(self, subject, owner, builder=HelpForNapoleonDocstring.from_subject):
        super().__init__(subject, owner, builder)


# input handling


class ObjectAsStr(str):
    """Hide object under a string to pass it through Clize parser."""

    __slots__ = ("original_object",)

    def __new__(cls, obj, name=None):
        if isinstance(obj, cls):  # pass object through if already wrapped
            return obj
        if name is None:
            name = cls.obj_to_name(obj)
        self = str.__new__(cls, name)
        self.original_object = obj
        return self

    @staticmethod
    def obj_to_name(obj, cls=None):
        """Helper function to create the string."""
        if cls is None:
            cls = type(obj)
        try:
            obj_id = hash(obj)
        except TypeError:
            obj_id = id(obj)
        return "<%s.%s@%i>" % (cls.__module__, cls.__name__, obj_id)


def maybe_coerce_with(converter, obj, **kwargs):
    """Apply converter if str, pass through otherwise."""
    obj = getattr(obj, "original_object", obj)
    return converter(obj, **kwargs) if isinstance(obj, str) else obj


def _grid_from_object(obj):
    """Build a grid from a cube, passing grids through unchanged."""
    from iris.cube import Cube

    from projgrid.grid import ProjectedGrid

    if isinstance(obj, Cube):
        return ProjectedGrid.from_cube(obj)
    return obj


@value_converter
def inputgrid(to_convert):
    """Loads a grid from a cube file or returns passed object.

    Args:
        to_convert (string or iris.cube.Cube or projgrid.grid.ProjectedGrid):
            File name, Cube object or grid.

    Returns:
        projgrid.grid.ProjectedGrid:
            The loaded or converted grid.
    """
    from projgrid.utilities.load import load_grid

    return _grid_from_object(maybe_coerce_with(load_grid, to_convert))


@value_converter
def inputjson(to_convert):
    """Loads json from file or returns passed object.

    Args:
        to_convert (string or dict or list):
            File name or json content.

    Returns:
        Loaded json content or passed object.
    """
    from projgrid.utilities.cli_utilities import load_json_or_none

    return maybe_coerce_with(load_json_or_none, to_convert)


# output handling


@decorator
def with_output(wrapped, *args, output=None, **kwargs):
    """Add `output` keyword only argument.

    This is used to add an extra `output` CLI option. If provided, it saves
    the result of calling `wrapped` to a json file and returns None,
    otherwise it returns the result as json text.

    Args:
        wrapped (obj):
            The function to be wrapped.
        output (str, optional):
            Output file name. If not supplied, the output json will be
            printed instead.

    Returns:
        Result of calling `wrapped` as json text or None if `output` is given.
    """
    from projgrid.utilities.cli_utilities import save_json, to_json

    result = wrapped(*args, **kwargs)
    if output:
        save_json(result, output)
        return
    return to_json(result)


# cli object creation


def clizefy(obj=None, helper_class=DocutilizeClizeHelp, **kwargs):
    """Decorator for creating CLI objects."""
    if obj is None:
        return partial(clizefy, helper_class=helper_class, **kwargs)
    if hasattr(obj, "cli"):
        return obj
    if not callable(obj):
        return Clize.get_cli(obj, **kwargs)
    return Clize.keep(obj, helper_class=helper_class, **kwargs)


# help command


@clizefy(help_names=())
def projgrid_help(prog_name: parameters.pass_name, command=None, *, usage=False):
    """Show command help."""
    prog_name = prog_name.split()[0]
    args = filter(None, [command, "--help", usage and "--usage"])
    result = execute_command(SUBCOMMANDS_DISPATCHER, prog_name, *args)
    if not command and usage:
        result = "\n".join(
            line
            for line in result.splitlines()
            if not line.endswith("--help [--usage]")
        )
    return result


def _cli_items():
    """Dynamically discover CLIs."""
    import importlib
    import pkgutil

    from projgrid.cli import __path__ as projgrid_cli_pkg_path

    yield ("help", projgrid_help)
    for minfo in pkgutil.iter_modules(projgrid_cli_pkg_path):
        mod_name = minfo.name
        if mod_name != "__main__":
            mcli = importlib.import_module("projgrid.cli." + mod_name)
            yield (mod_name, clizefy(mcli.process))


SUBCOMMANDS_TABLE = OrderedDict(sorted(_cli_items()))


# main CLI object with subcommands


SUBCOMMANDS_DISPATCHER = clizefy(
    SUBCOMMANDS_TABLE,
    description="""Projected horizontal grid indexing toolbox""",
    footnotes="""See also projgrid --help for more information.""",
)


# projgrid top level main


def execute_command(dispatcher, prog_name, *args, verbose=False, dry_run=False):
    """Common entry point for command execution."""
    args = list(args)
    for i, arg in enumerate(args):
        if not isinstance(arg, str):
            arg = ObjectAsStr(arg)
        args[i] = arg

    if verbose or dry_run:
        print(" ".join([shlex.quote(x) for x in (prog_name, *args)]))
    if dry_run:
        return args

    result = dispatcher(prog_name, *args)

    if verbose and result is not None:
        print(ObjectAsStr.obj_to_name(result))
    return result


@clizefy()
def main(
    prog_name: parameters.pass_name,
    command: LAST_OPTION,
    *args,
    verbose=False,
    dry_run=False,
):
    """Projected horizontal grid indexing toolbox

    Args:
        prog_name:
            The program name from argv[0].
        command (str):
            Command to execute
        args (tuple):
            Command arguments
        verbose (bool):
            Print executed commands
        dry_run (bool):
            Print commands to be executed

    See projgrid help [--usage] [command] for more information
    on available command(s).
    """
    return execute_command(
        SUBCOMMANDS_DISPATCHER,
        prog_name,
        command,
        *args,
        verbose=verbose,
        dry_run=dry_run,
    )


def run_main(argv=None):
    """Overrides argv[0] to be 'projgrid' then runs main.

    Args:
        argv (list of str):
            Arguments that were from the command line.
    """
    import sys

    from clize import run

    # clize help shows module execution as `python -m projgrid.cli`
    # override argv[0] and pass it explicitly in order to avoid this
    # so that the help command reflects the way that we call projgrid.
    if argv is None:
        argv = sys.argv[:]
        argv[0] = "projgrid"
    run(main, args=argv)  # pylint: disable=E1124
