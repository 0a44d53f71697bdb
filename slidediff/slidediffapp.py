# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer

from .args import (
    add_generic_args, add_diff_args, add_output_args, ConfigBackedParser,
    diff_config_from_args,
    )
from .comparer import Comparer
from .log import SlideDiffError, AmbiguousIdentityError, error, info
from .summary import render_summary, render_change_list
from .textdiff import RenderConfig, render_tree_markdown_report
from .utils import EXPLICIT_MISSING_FILE, read_document, setup_std_streams, write_output


_description = "Compute the difference between two slide deck documents."


def render_json(changes, use_color=False):
    text = json.dumps(changes.to_records(), indent=2, separators=(",", ": "),
                      ensure_ascii=False) + "\n"
    if use_color:
        text = highlight(text, JsonLexer(), TerminalFormatter())
    return text


def render_projections(result, changes, args, use_color=False):
    """Yield (name, render) pairs for the projections selected by args.format.

    Rendering is deferred so that a failing projection does not
    prevent the ones before it from being output.
    """
    fmt = args.format
    if fmt in ('summary', 'all'):
        yield 'summary', lambda: render_summary(changes, details=args.details)
    if fmt in ('changes', 'all'):
        yield 'changes', lambda: render_change_list(changes)
    if fmt == 'json':
        yield 'json', lambda: render_json(changes, use_color)
    if fmt in ('text', 'all'):
        yield 'text', lambda: result.text_diff(
            config=RenderConfig(use_color=use_color, context=args.context))
    if fmt == 'markdown':
        yield 'markdown', lambda: render_tree_markdown_report(
            result.base, result.modified,
            base_label=result.comparer.base_label,
            modified_label=result.comparer.modified_label,
            context=args.context)


def main_diff(args):
    """Main handler of diff CLI"""
    base = args.base
    modified = args.modified
    output = getattr(args, 'out', None)

    # Check that if args are filenames they either exist, or are
    # explicitly marked as missing (added/removed):
    for fn in (base, modified):
        if (isinstance(fn, str) and not os.path.exists(fn) and
                fn != EXPLICIT_MISSING_FILE):
            print("Missing file {}".format(fn))
            return 1
    if base == EXPLICIT_MISSING_FILE and modified == EXPLICIT_MISSING_FILE:
        print("Cannot diff %r against %r" % (base, modified))
        return 1
    if args.context < 0:
        print("Number of context lines must be >= 0, got %d" % args.context)
        return 1

    try:
        a = read_document(base, on_empty='empty')
        b = read_document(modified, on_empty='empty')
    except ValueError as e:
        error("Could not read documents: %s", e)
        return 1

    comparer = Comparer(
        a, config=diff_config_from_args(args), simplify=not args.details,
        context=args.context, base_label=base, modified_label=modified)
    try:
        result = comparer.compare(b)
    except AmbiguousIdentityError as e:
        error("Cannot align arrays: %s", e)
        return 1

    changes = result.changes
    if args.path:
        try:
            changes = changes.filter(args.path)
        except ValueError as e:
            error("Invalid path filter: %s", e)
            return 1
        info("Showing %d of %d changes below %r", len(changes), len(result.changes), args.path)

    use_color = args.color and not output
    sink = output or sys.stdout

    # Output each projection in turn, keeping what was already rendered
    # if a later one fails:
    parts = []
    status = 0
    for name, render in render_projections(result, changes, args, use_color):
        try:
            parts.append(render())
        except SlideDiffError as e:
            error("Could not render %s output: %s", name, e)
            status = 1
            break
    try:
        write_output("\n".join(parts), sink)
    except SlideDiffError as e:
        error("%s", e)
        return 1
    return status


def _build_arg_parser(prog=None):
    """Creates an argument parser for the slidediff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog or 'slidediff',
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_output_args(parser)

    parser.add_argument(
        "base",
        help="the base document filename, or %s for an empty document." % EXPLICIT_MISSING_FILE)
    parser.add_argument(
        "modified",
        help="the modified document filename, or %s for an empty document." % EXPLICIT_MISSING_FILE)

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
