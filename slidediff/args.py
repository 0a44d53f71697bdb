# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
    OUTPUT_FORMATS,
)
from .diffing.config import DiffConfig, ALIGNMENT_POLICIES, REORDER_MODES
from .log import init_logging, set_slidediff_log_level


class ConfigBackedParser(argparse.ArgumentParser):

    def parse_known_args(self, args=None, namespace=None):
        entrypoint = self.prog.split(' ')[0]
        try:
            defs = get_defaults_for_argparse(entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_slidediff_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_slidediff_log_level(level, True)


def modify_config_for_print(config):
    output = {}
    for k, v in config.items():
        if isinstance(v, dict):
            output[k] = modify_config_for_print(v)
            if not output[k]:
                output[k] = '{}'
        else:
            output[k] = json.dumps(v)
    return output


def print_config_dict(d, out, indent=""):
    for key in sorted(d):
        value = d[key]
        if isinstance(value, dict):
            out.write("%s%s:\n" % (indent, key))
            print_config_dict(value, out, indent + "  ")
        else:
            out.write("%s%s: %s\n" % (indent, key, value))


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        header = entrypoint_configurables[parser.prog].__name__
        config = build_config(parser.prog, True)
        print_config_dict(
            {
                header: modify_config_for_print(config),
            },
            out=sys.stderr,
        )
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all slidediff commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_diff_args(parser):
    """Adds a set of arguments controlling how documents are diffed.
    """
    diffing = parser.add_argument_group(
        title='diffing',
        description='Set how array elements are matched between documents.')
    diffing.add_argument(
        '--identity-keys',
        nargs='+',
        metavar='KEY',
        help="candidate identity fields for array elements, "
             "in order of preference (default: objectId id).")
    diffing.add_argument(
        '--alignment',
        choices=ALIGNMENT_POLICIES,
        help="align array elements by identity field (falling back "
             "to position) or by position only.")
    diffing.add_argument(
        '--reorder',
        choices=REORDER_MODES,
        help="report moved elements whenever their index changes (absolute), "
             "or only when their order among kept elements changes (relative).")
    diffing.add_argument(
        '--strict',
        action='store_true',
        help="fail on duplicate identities instead of aligning them by position.")
    diffing.add_argument(
        '--ignore',
        nargs='+',
        metavar='PATH',
        help="paths to leave out of the diff, with * for any array "
             "element, e.g. /revisionId /slides/*/revisionId.")
    diffing.add_argument(
        '--atomic',
        nargs='+',
        metavar='PATH',
        help="paths whose values are compared as a whole.")


def add_output_args(parser):
    """Adds optional arguments for selecting and formatting output.
    """
    parser.add_argument(
        '-f', '--format',
        default='summary',
        choices=OUTPUT_FORMATS,
        help="which projection of the diff to print (default: summary).")
    parser.add_argument(
        '--details',
        action='store_true',
        help="describe every change below the summary.")
    parser.add_argument(
        '--context',
        default=3,
        type=int,
        metavar='N',
        help="number of unchanged lines around changes in text diffs.")
    parser.add_argument(
        '--path',
        default=None,
        help="only show changes at or below this path, e.g. 'slides{objectId=p1}'.")
    parser.add_argument(
        '--color',
        dest='color',
        action='store_true',
        help="use ANSI color code escapes for text output.")
    parser.add_argument(
        '--no-color',
        dest='color',
        action='store_false',
        help="prevent use of ANSI color code escapes for text output.")
    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the output is written to this file. "
             "Otherwise it is printed to the terminal.")


def diff_config_from_args(arguments):
    "Build a DiffConfig from parsed diffing arguments."
    return DiffConfig(
        identity_keys=getattr(arguments, 'identity_keys', None),
        alignment=getattr(arguments, 'alignment', None) or 'identity',
        reorder=getattr(arguments, 'reorder', None) or 'absolute',
        strict=getattr(arguments, 'strict', False),
        ignore_paths=getattr(arguments, 'ignore', None),
        atomic_paths=getattr(arguments, 'atomic', None),
    )
