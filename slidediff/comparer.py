# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .diffing import diff, DiffConfig
from .summary import render_summary
from .textdiff import (
    render_text_diff, render_tree_markdown_report, DEFAULT_CONTEXT,
    DEFAULT_BASE_LABEL, DEFAULT_MODIFIED_LABEL,
)
from .tree import copy_tree


class Comparer(object):
    """Compares documents against a stored base document.

    Parameters
    ----------

    base: tree
        The document every later document is compared to
    config: DiffConfig
        Alignment and reorder settings for the differ
    simplify: bool
        If true, readable diffs only show the per group summary
    context: int
        Number of context lines in text diffs
    """

    def __init__(self, base, config=None, simplify=False, context=DEFAULT_CONTEXT,
                 base_label=DEFAULT_BASE_LABEL, modified_label=DEFAULT_MODIFIED_LABEL):
        if context < 0:
            raise ValueError("Number of context lines must be >= 0, got %r" % (context,))
        self.base = copy_tree(base)
        self.config = config if config is not None else DiffConfig()
        self.simplify = simplify
        self.context = context
        self.base_label = base_label
        self.modified_label = modified_label

    def compare(self, modified):
        "Compare modified to the base document."
        changes = diff(self.base, modified, config=self.config)
        return ComparisonResult(self, copy_tree(modified), changes)


class ComparisonResult(object):
    """The outcome of one comparison.

    The ChangeSet is computed up front. The text projections are
    rendered on request, so a failing projection does not affect
    the others.
    """

    def __init__(self, comparer, modified, changes):
        self.comparer = comparer
        self.modified = modified
        self.changes = changes

    @property
    def base(self):
        return self.comparer.base

    def structured_diff(self):
        return self.changes

    def to_records(self):
        return self.changes.to_records()

    def text_diff(self, config=None):
        return render_text_diff(
            self.base, self.modified, context=self.comparer.context,
            base_label=self.comparer.base_label,
            modified_label=self.comparer.modified_label,
            config=config)

    def readable_diff(self):
        return render_summary(self.changes, details=not self.comparer.simplify)

    def markdown_report(self):
        return render_tree_markdown_report(
            self.base, self.modified,
            base_label=self.comparer.base_label,
            modified_label=self.comparer.modified_label,
            context=self.comparer.context)
