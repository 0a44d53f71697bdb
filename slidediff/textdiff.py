# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Line based text diff of two document trees.

Each tree is written in a canonical json-like form (two space indentation,
fields and elements in stored order) and the two line sequences are
compared with a longest common subsequence diff. The result is rendered
as a unified diff.
"""

from collections import namedtuple
import json
import math

import colorama

from .diff_format import Path, Field, Index
from .diffing.lcs import lcs_opcodes
from .log import SerializationError


# Indentation offset in canonical serialization
IND = "  "

DEFAULT_CONTEXT = 3

DEFAULT_BASE_LABEL = "a/document.json"
DEFAULT_MODIFIED_LABEL = "b/document.json"


ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = ' ',
        REMOVE = '{color}-'.format(color=colorama.Fore.RED),
        ADD    = '{color}+'.format(color=colorama.Fore.GREEN),
        INFO   = '{color}'.format(color=colorama.Fore.CYAN),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = ' ',
        REMOVE = '-',
        ADD    = '+',
        INFO   = '',
        RESET  = '',
    )
}


class RenderConfig:
    def __init__(self, use_color=False, context=DEFAULT_CONTEXT):
        if context < 0:
            raise ValueError("Number of context lines must be >= 0, got %r" % (context,))
        self.use_color = use_color
        self.context = context

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = RenderConfig()


def format_scalar(value, path):
    "Format a scalar leaf in canonical form."
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        raise SerializationError("Cannot serialize non-finite number %r" % value, path)
    if value is None or isinstance(value, (str, bool, int, float)):
        return json.dumps(value, ensure_ascii=False)
    raise SerializationError(
        "Cannot serialize value of type %s" % type(value).__name__, path)


def _canonical_item(value, path, prefix, head, tail, lines):
    """Append the lines of value to lines.

    head is written before the value on its first line (a field name),
    tail after it on its last line (a separating comma).
    """
    if isinstance(value, dict):
        if not value:
            lines.append("%s%s{}%s" % (prefix, head, tail))
            return
        lines.append("%s%s{" % (prefix, head))
        n = len(value)
        for k, (key, child) in enumerate(value.items()):
            if not isinstance(key, str):
                raise SerializationError("Object key %r is not a string" % (key,), path)
            _canonical_item(child, path.child(Field(key)), prefix + IND,
                            json.dumps(key, ensure_ascii=False) + ": ",
                            "," if k < n - 1 else "", lines)
        lines.append("%s}%s" % (prefix, tail))
    elif isinstance(value, (list, tuple)):
        if not value:
            lines.append("%s%s[]%s" % (prefix, head, tail))
            return
        lines.append("%s%s[" % (prefix, head))
        n = len(value)
        for i, child in enumerate(value):
            _canonical_item(child, path.child(Index(i)), prefix + IND,
                            "", "," if i < n - 1 else "", lines)
        lines.append("%s]%s" % (prefix, tail))
    else:
        lines.append("%s%s%s%s" % (prefix, head, format_scalar(value, path), tail))


def canonical_lines(value):
    """Serialize a tree to a list of lines in canonical form.

    Raises a SerializationError naming the path of the first node
    that cannot be serialized.
    """
    lines = []
    _canonical_item(value, Path(), "", "", "", lines)
    return lines


def canonical_text(value):
    "Serialize a tree to canonical text, ending with a newline."
    return "\n".join(canonical_lines(value)) + "\n"


def group_opcodes(opcodes, context=DEFAULT_CONTEXT):
    """Group opcodes into hunks with up to context lines of equal text around changes.

    Returns a list of hunks, each a list of opcodes.
    """
    codes = list(opcodes)
    if not any(tag != "equal" for tag, i1, i2, j1, j2 in codes):
        return []

    # Trim leading and trailing equal runs to the context size
    if codes[0][0] == "equal":
        tag, i1, i2, j1, j2 = codes[0]
        codes[0] = tag, max(i1, i2 - context), i2, max(j1, j2 - context), j2
    if codes[-1][0] == "equal":
        tag, i1, i2, j1, j2 = codes[-1]
        codes[-1] = tag, i1, min(i2, i1 + context), j1, min(j2, j1 + context)

    hunks = []
    group = []
    for tag, i1, i2, j1, j2 in codes:
        # Split long equal runs into the end of one hunk and the start of the next
        if tag == "equal" and i2 - i1 > 2 * context:
            group.append((tag, i1, min(i2, i1 + context), j1, min(j2, j1 + context)))
            hunks.append(group)
            group = []
            i1, j1 = max(i1, i2 - context), max(j1, j2 - context)
        group.append((tag, i1, i2, j1, j2))
    if group and not (len(group) == 1 and group[0][0] == "equal"):
        hunks.append(group)
    # A leading equal-only group appears when the first run was split
    return [h for h in hunks if any(code[0] != "equal" for code in h)]


def format_range(start, stop):
    "Format a hunk range as 'start,count' with a 1-based start line."
    length = stop - start
    beginning = start + 1
    if not length:
        # Empty ranges point at the line before the hunk
        beginning -= 1
    return "{},{}".format(beginning, length)


def hunk_header(hunk, config=DefaultConfig):
    first, last = hunk[0], hunk[-1]
    return "%s@@ -%s +%s @@%s" % (
        config.INFO,
        format_range(first[1], last[2]),
        format_range(first[3], last[4]),
        config.RESET)


def iter_unified(a_lines, b_lines, base_label=DEFAULT_BASE_LABEL,
                 modified_label=DEFAULT_MODIFIED_LABEL, config=DefaultConfig):
    "Yield the lines of a unified diff of two line sequences."
    hunks = group_opcodes(lcs_opcodes(a_lines, b_lines), config.context)
    if not hunks:
        return
    yield "%s--- %s%s" % (config.INFO, base_label, config.RESET)
    yield "%s+++ %s%s" % (config.INFO, modified_label, config.RESET)
    for hunk in hunks:
        yield hunk_header(hunk, config)
        for tag, i1, i2, j1, j2 in hunk:
            if tag == "equal":
                for line in a_lines[i1:i2]:
                    yield "%s%s" % (config.KEEP, line)
                continue
            for line in a_lines[i1:i2]:
                yield "%s%s%s" % (config.REMOVE, line, config.RESET)
            for line in b_lines[j1:j2]:
                yield "%s%s%s" % (config.ADD, line, config.RESET)


def render_unified(a_lines, b_lines, base_label=DEFAULT_BASE_LABEL,
                   modified_label=DEFAULT_MODIFIED_LABEL, config=DefaultConfig):
    """Render a unified diff of two line sequences.

    Returns the empty string when the sequences are equal.
    """
    lines = list(iter_unified(a_lines, b_lines, base_label, modified_label, config))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_text_diff(base, modified, context=None, base_label=DEFAULT_BASE_LABEL,
                     modified_label=DEFAULT_MODIFIED_LABEL, config=None):
    """Render a unified diff of the canonical serializations of two trees.

    Parameters
    ----------

    base: tree
        The base document tree
    modified: tree
        The modified document tree
    context: int
        Number of unchanged lines around each change, overrides config.context
    config: RenderConfig
        Config object determining colors and default context
    """
    if config is None:
        config = RenderConfig(context=DEFAULT_CONTEXT if context is None else context)
    elif context is not None:
        config = RenderConfig(use_color=config.use_color, context=context)
    return render_unified(canonical_lines(base), canonical_lines(modified),
                          base_label, modified_label, config)


def diff_text(a_text, b_text, base_label=DEFAULT_BASE_LABEL,
              modified_label=DEFAULT_MODIFIED_LABEL, config=DefaultConfig):
    "Render a unified diff of two already rendered texts."
    return render_unified(a_text.splitlines(), b_text.splitlines(),
                          base_label, modified_label, config)


def count_line_changes(a_lines, b_lines):
    "Return the number of (added, removed) lines between two line sequences."
    added = removed = 0
    for tag, i1, i2, j1, j2 in lcs_opcodes(a_lines, b_lines):
        if tag != "equal":
            removed += i2 - i1
            added += j2 - j1
    return added, removed


markdown_report_header = """\
# Summary of Changes

---
## Comparison: `{afn}` vs `{bfn}`
"""

def render_markdown_report(a_text, b_text, base_label=DEFAULT_BASE_LABEL,
                           modified_label=DEFAULT_MODIFIED_LABEL, context=DEFAULT_CONTEXT):
    """Render a Markdown report comparing two texts.

    The report counts added and removed lines and embeds the
    unified diff in a fenced diff block.
    """
    lines = [markdown_report_header.format(afn=base_label, bfn=modified_label)]
    a_lines = a_text.splitlines()
    b_lines = b_text.splitlines()
    if a_lines == b_lines:
        lines.append("> No textual differences found.\n")
    else:
        added, removed = count_line_changes(a_lines, b_lines)
        lines.append("> Documents differ.\n")
        lines.append("> - Lines Added: %d\n" % added)
        lines.append("> - Lines Removed: %d\n\n" % removed)
        lines.append("```diff\n")
        lines.append(render_unified(a_lines, b_lines, base_label, modified_label,
                                    RenderConfig(context=context)))
        lines.append("```\n")
    lines.append("\n---\n")
    return "".join(lines)


def render_tree_markdown_report(base, modified, base_label=DEFAULT_BASE_LABEL,
                                modified_label=DEFAULT_MODIFIED_LABEL, context=DEFAULT_CONTEXT):
    "Render a Markdown report comparing the canonical serializations of two trees."
    return render_markdown_report(canonical_text(base), canonical_text(modified),
                                  base_label, modified_label, context)
