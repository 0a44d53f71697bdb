# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Human readable summaries of a ChangeSet.

The summary groups changes by their outermost container, e.g. one slide,
and counts changes of each kind per group.
"""

from collections import OrderedDict
import json

from .diff_format import ChangeKind, CHANGE_KINDS, ELEMENT_SEGMENTS, Path


ROOT_GROUP = "(document)"

# Maximal length of a string value in readable output
MAX_STRING_LENGTH = 60

# Replacements applied to rendered paths, in order
FRIENDLY_NAMES = (
    (".pageElements", ".Element"),
    (".textElements", ".Text"),
    (".shape.text", ".Shape Text"),
    (".shape.shapeProperties", ".Shape Properties"),
    (".textRun.content", ".Content"),
    (".textRun.style", ".Style"),
    (".style.foregroundColor", ".Color"),
    (".style.fontSize", ".Font Size"),
    (".style.bold", ".Bold"),
    )

_type_names = {
    dict: "Object",
    list: "Item in Array",
    str: "Text",
    bool: "Boolean",
    int: "Number",
    float: "Number",
    }


def change_group(path):
    """Return the display name of the group a change at path belongs to.

    The group is the first segment of the path, extended with the
    next segment when that one picks an array element.
    """
    if not path:
        return ROOT_GROUP
    n = 2 if len(path) > 1 and isinstance(path[1], ELEMENT_SEGMENTS) else 1
    return Path(path[:n]).render()


def summarize(changes):
    """Count changes per group and kind.

    Returns an OrderedDict mapping group name to a dict of counts per
    change kind, with groups in order of first appearance.
    """
    groups = OrderedDict()
    for c in changes:
        counts = groups.get(change_group(c.path))
        if counts is None:
            counts = groups[change_group(c.path)] = dict.fromkeys(CHANGE_KINDS, 0)
        counts[c.kind] += 1
    return groups


def _format_counts(counts):
    return ", ".join("%d %s" % (counts[kind], kind) for kind in CHANGE_KINDS)


def format_value(value):
    """Format a tree value for a one line description.

    Strings are escaped and truncated, containers are summarized.
    """
    if isinstance(value, str):
        s = (value.replace("\\", "\\\\")
             .replace("\n", "\\n")
             .replace("\r", "\\r")
             .replace("\t", "\\t")
             .replace("`", "\\`"))
        if len(s) > MAX_STRING_LENGTH:
            s = s[:MAX_STRING_LENGTH - 3] + "..."
        return s
    elif isinstance(value, dict):
        return "{Object}"
    elif isinstance(value, (list, tuple)):
        return "[Array len=%d]" % len(value)
    return json.dumps(value)


def friendly_path(path, friendly_names=None):
    "Render path with well known field sequences replaced by readable names."
    if not path:
        return ROOT_GROUP
    if friendly_names is None:
        friendly_names = FRIENDLY_NAMES
    text = "." + path.render()
    for old, new in friendly_names:
        text = text.replace(old, new)
    return text.lstrip(".")


def _type_name(value):
    if value is None:
        return "Null value"
    return _type_names.get(type(value), "Item")


def describe_change(c, friendly_names=None):
    "Describe a single change in one line of text."
    name = friendly_path(c.path, friendly_names)
    if c.kind == ChangeKind.ADDED:
        return "- Added %s at `%s`" % (_type_name(c.new_value), name)
    elif c.kind == ChangeKind.REMOVED:
        return "- Removed %s from `%s`" % (_type_name(c.old_value), name)
    elif c.kind == ChangeKind.REORDERED:
        return "- Moved `%s` from position %d to %d" % (name, c.old_index, c.new_index)
    old, new = c.old_value, c.new_value
    if isinstance(old, (dict, list)) or isinstance(new, (dict, list)):
        return "- Modified `%s` (%s -> %s)" % (name, format_value(old), format_value(new))
    return "- Changed `%s` from %s to %s" % (name, format_value(old), format_value(new))


def render_summary(changes, details=False, friendly_names=None):
    """Render the per group summary of a ChangeSet.

    One line is written per group with changes, followed by a total line.
    With details, every change is also described on its own line.
    """
    lines = []
    for group, counts in summarize(changes).items():
        lines.append("%s: %s" % (group, _format_counts(counts)))

    counts = dict.fromkeys(CHANGE_KINDS, 0)
    for c in changes:
        counts[c.kind] += 1
    total = len(changes)
    lines.append("Total: %d %s (%s)" % (
        total, "change" if total == 1 else "changes", _format_counts(counts)))

    if details and changes:
        lines.append("")
        lines.append("Details:")
        lines.extend(describe_change(c, friendly_names) for c in changes)
    return "\n".join(lines) + "\n"


_markers = {
    ChangeKind.ADDED: "+",
    ChangeKind.REMOVED: "-",
    ChangeKind.MODIFIED: "~",
    ChangeKind.REORDERED: ">",
    }


def render_change_list(changes):
    """Render a ChangeSet as a list, one change per line.

    Each line starts with a marker for the change kind:
    + added, - removed, ~ modified and > reordered.
    """
    lines = []
    for c in changes:
        path = c.path.render() or ROOT_GROUP
        marker = _markers[c.kind]
        if c.kind == ChangeKind.ADDED:
            lines.append("%s %s: %s" % (marker, path, format_value(c.new_value)))
        elif c.kind == ChangeKind.REMOVED:
            lines.append("%s %s: %s" % (marker, path, format_value(c.old_value)))
        elif c.kind == ChangeKind.MODIFIED:
            lines.append("%s %s: %s -> %s" % (
                marker, path, format_value(c.old_value), format_value(c.new_value)))
        else:
            lines.append("%s %s: %d -> %d" % (marker, path, c.old_index, c.new_index))
    return "".join(line + "\n" for line in lines)
