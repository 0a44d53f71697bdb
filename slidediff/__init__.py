# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .comparer import Comparer, ComparisonResult
from .diff_format import Path, Change, ChangeSet, ChangeKind, Field, Index, Identity
from .diffing import diff, DiffConfig
from .log import (
    SlideDiffError, DiffFormatError, SerializationError,
    AmbiguousIdentityError, OutputError,
)
from .summary import render_summary
from .textdiff import render_text_diff


__all__ = [
    "__version__",
    "diff", "DiffConfig",
    "render_text_diff", "render_summary",
    "Comparer", "ComparisonResult",
    "Path", "Change", "ChangeSet", "ChangeKind", "Field", "Index", "Identity",
    "SlideDiffError", "DiffFormatError", "SerializationError",
    "AmbiguousIdentityError", "OutputError",
    ]
