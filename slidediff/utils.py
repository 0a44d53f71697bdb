# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

from .diff_format import Field
from .log import OutputError
from .tree import load

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def read_document(f, on_empty=None):
    """Load a document tree for diffing.

    f is a filename, a readable file object, or the null device
    (EXPLICIT_MISSING_FILE), which stands for an empty object.

    on_empty decides what a zero length file gives: None raises the
    parse error, "empty" gives an empty object.
    """
    if f == EXPLICIT_MISSING_FILE:
        return {}
    try:
        return load(f)
    except ValueError:
        if on_empty is None:
            raise
        # Only blank files are treated as empty
        if isinstance(f, str):
            with io.open(f, encoding='utf-8') as fo:
                if fo.read().strip():
                    raise
        if on_empty == 'empty':
            return {}
        raise ValueError(
            'Unknown on_empty mode %r, expected None or "empty"' % (on_empty,))


def split_path(path):
    "Split a path on the form '/foo/bar' into ['foo','bar']."
    return [x for x in path.strip("/").split("/") if x]


def join_path(*args):
    "Join a path on the form ['foo','bar'] into '/foo/bar'."
    if len(args) == 1 and isinstance(args[0], (list, tuple, set)):
        args = args[0]
    args = [str(a) for a in args if a not in ["", "/"]]
    ret = "/".join(args)
    return ret if ret.startswith("/") else "/" + ret


def star_path(path):
    """Write a Path as '/foo/*/bar', with every array element replaced by *"""
    return join_path([s.name if isinstance(s, Field) else '*' for s in path])


def path_matches(path, pattern):
    """Whether the star path of path is pattern or lies below it.

    pattern is a star path such as '/slides/*/revisionId'.
    """
    starred = star_path(path)
    pattern = join_path(split_path(pattern))
    if pattern == "/":
        return True
    return starred == pattern or starred.startswith(pattern + "/")


def write_output(text, out):
    """Write rendered text to a file-like object or a filename.

    Raises an OutputError if the sink rejects the text.
    """
    try:
        if isinstance(out, str):
            with io.open(out, "w", encoding="utf-8") as f:
                f.write(text)
        else:
            out.write(text)
    except (OSError, ValueError) as e:
        name = out if isinstance(out, str) else getattr(out, "name", repr(out))
        raise OutputError("Could not write output to %s: %s" % (name, e)) from e


def setup_std_streams():
    """Prepare sys.stdout/err for printing documents.

    Unencodable characters are written as backslash escapes instead of
    failing, and colorama translates ANSI colors on Windows.
    """
    if not os.getenv('PYTHONIOENCODING'):
        for stream in (sys.stdout, sys.stderr):
            # captured or redirected streams are left alone
            if stream not in (sys.__stdout__, sys.__stderr__):
                continue
            errors = getattr(stream, 'errors', None) or 'strict'
            if errors == 'strict' or errors.startswith('surrogate'):
                stream.reconfigure(errors='backslashreplace')
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
