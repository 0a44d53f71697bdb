# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import re
from collections import namedtuple

from .log import DiffFormatError
from .tree import copy_tree


# Field names and identity parts matching this are rendered bare,
# anything else is rendered as a json string
_bare = re.compile(r'^[^.\[\]{}"=\\]+$')

_quoted = r'"(?:[^"\\]|\\.)*"'
_part = r'(?:%s|[^.\[\]{}"=\\]+)' % _quoted

_segment = re.compile(r'''
    (?P<dot>\.)?
    (?:
        (?P<name>[^.\[\]{}"=\\]+)
      | \[(?P<index>\d+)\]
      | \[(?P<quoted>%s)\]
      | \{(?P<idfield>%s)=(?P<idkey>%s)\}
    )''' % (_quoted, _part, _part), re.VERBOSE)


def _render_part(text):
    if _bare.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


def _parse_part(text):
    if text.startswith('"'):
        return json.loads(text)
    return text


class Field(namedtuple("Field", ("name",))):
    "Path segment addressing an object field by name."
    __slots__ = ()

    def render(self, first=False):
        if _bare.match(self.name):
            return self.name if first else "." + self.name
        return "[%s]" % json.dumps(self.name, ensure_ascii=False)


class Index(namedtuple("Index", ("position",))):
    "Path segment addressing an array element by position."
    __slots__ = ()

    def render(self, first=False):
        return "[%d]" % self.position


class Identity(namedtuple("Identity", ("field", "key"))):
    "Path segment addressing an array element by the value of its identity field."
    __slots__ = ()

    def render(self, first=False):
        return "{%s=%s}" % (_render_part(self.field), _render_part(self.key))


ELEMENT_SEGMENTS = (Index, Identity)


class Path(tuple):
    """An address in a document tree, made of Field, Index and Identity segments.

    The root is the empty path. Paths render as e.g.

        slides{objectId=p1}.pageElements[0].size

    and Path.parse() reads that form back.
    """
    __slots__ = ()

    def __new__(cls, segments=()):
        return super(Path, cls).__new__(cls, segments)

    def child(self, segment):
        return Path(tuple(self) + (segment,))

    def field(self, name):
        return self.child(Field(name))

    @property
    def parent(self):
        return Path(self[:-1])

    @property
    def last(self):
        return self[-1] if self else None

    def startswith(self, prefix):
        if not isinstance(prefix, Path):
            prefix = Path.parse(prefix)
        return tuple(self[:len(prefix)]) == tuple(prefix)

    def render(self):
        return "".join(s.render(first=(i == 0)) for i, s in enumerate(self))

    def __str__(self):
        return self.render()

    def __repr__(self):
        return "Path(%r)" % self.render()

    def __add__(self, other):
        return Path(tuple(self) + tuple(other))

    def __getitem__(self, item):
        if isinstance(item, slice):
            return Path(tuple.__getitem__(self, item))
        return tuple.__getitem__(self, item)

    @classmethod
    def parse(cls, text):
        "Parse a rendered path back into a Path."
        segments = []
        pos = 0
        while pos < len(text):
            m = _segment.match(text, pos)
            if m is None:
                raise ValueError("Invalid path %r at offset %d" % (text, pos))
            if m.group("name") is not None:
                if bool(segments) != bool(m.group("dot")):
                    raise ValueError("Invalid '.' before field %r in path %r" % (
                        m.group("name"), text))
                segments.append(Field(m.group("name")))
            elif m.group("dot"):
                raise ValueError("Unexpected '.' in path %r at offset %d" % (text, pos))
            elif m.group("index") is not None:
                segments.append(Index(int(m.group("index"))))
            elif m.group("quoted") is not None:
                segments.append(Field(json.loads(m.group("quoted"))))
            else:
                segments.append(Identity(_parse_part(m.group("idfield")),
                                         _parse_part(m.group("idkey"))))
            pos = m.end()
        return cls(segments)


ROOT = Path()


class ChangeKind:
    "Collection of valid values for the kind field in change records."
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    REORDERED = "reordered"


CHANGE_KINDS = (
    ChangeKind.ADDED,
    ChangeKind.REMOVED,
    ChangeKind.MODIFIED,
    ChangeKind.REORDERED,
    )


class Change(namedtuple("Change", (
        "path", "kind", "old_value", "new_value", "old_index", "new_index"))):
    """A single difference between two document trees.

    old_value/new_value hold the values removed/added/replaced at path.
    old_index/new_index are only set for reordered array elements.
    """
    __slots__ = ()

    def to_record(self):
        "Convert to a json-compatible dict keyed by the rendered path."
        record = {
            "path": self.path.render(),
            "kind": self.kind,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }
        if self.kind == ChangeKind.REORDERED:
            record["old_index"] = self.old_index
            record["new_index"] = self.new_index
        return record


def op_added(path, value):
    "Create a change record for a value present only in the modified tree."
    return Change(path, ChangeKind.ADDED, None, copy_tree(value), None, None)

def op_removed(path, value):
    "Create a change record for a value present only in the base tree."
    return Change(path, ChangeKind.REMOVED, copy_tree(value), None, None, None)

def op_modified(path, old, new):
    "Create a change record for a value replaced by another one."
    return Change(path, ChangeKind.MODIFIED, copy_tree(old), copy_tree(new), None, None)

def op_reordered(path, old_index, new_index):
    "Create a change record for an array element that moved."
    return Change(path, ChangeKind.REORDERED, None, None, old_index, new_index)


class ChangeSet(tuple):
    """Ordered, immutable sequence of Change records.

    Changes come in depth-first document order, the order in which
    the differ visited them.
    """
    __slots__ = ()

    def __new__(cls, changes=()):
        return super(ChangeSet, cls).__new__(cls, changes)

    def filter(self, prefix):
        "Return the changes located at or below prefix (Path or rendered path)."
        if not isinstance(prefix, Path):
            prefix = Path.parse(prefix)
        return ChangeSet(c for c in self if c.path.startswith(prefix))

    def of_kind(self, kind):
        return ChangeSet(c for c in self if c.kind == kind)

    def paths(self):
        return [c.path for c in self]

    def counts(self):
        "Return a dict of number of changes per kind."
        counts = dict.fromkeys(CHANGE_KINDS, 0)
        for c in self:
            counts[c.kind] += 1
        return counts

    def to_records(self):
        return [c.to_record() for c in self]

    def __getitem__(self, item):
        if isinstance(item, slice):
            return ChangeSet(tuple.__getitem__(self, item))
        return tuple.__getitem__(self, item)

    def __repr__(self):
        return "ChangeSet(%r)" % (list(self),)


class ChangeSetBuilder(object):

    def __init__(self):
        self._changes = []

    def validated(self):
        changes = ChangeSet(self._changes)
        validate_changeset(changes)
        return changes

    def append(self, change):
        # Simplifies some algorithms
        if change is None:
            return

        # Typechecking (just for internal consistency checking)
        assert isinstance(change, Change)
        assert change.kind in CHANGE_KINDS
        assert isinstance(change.path, Path)

        self._changes.append(change)

    def added(self, path, value):
        self.append(op_added(path, value))

    def removed(self, path, value):
        self.append(op_removed(path, value))

    def modified(self, path, old, new):
        self.append(op_modified(path, old, new))

    def reordered(self, path, old_index, new_index):
        if old_index != new_index:
            self.append(op_reordered(path, old_index, new_index))


def is_valid_changeset(changes):
    """Checks whether a change set is well formed.

    Returns a boolean indicating the well-formedness of the change set.
    """
    try:
        validate_changeset(changes)
    except DiffFormatError:
        return False
    return True


def validate_changeset(changes):
    """Check whether a sequence of changes is well formed.

    Raises a DiffFormatError if not well formed.
    """
    seen = {}
    for c in changes:
        validate_change(c)
        # A path may carry both a reorder and one other change, never more
        slot = (c.path, c.kind == ChangeKind.REORDERED)
        if slot in seen:
            raise DiffFormatError(
                "Duplicate change at path %r: %s and %s" % (
                    c.path.render(), seen[slot], c.kind))
        seen[slot] = c.kind


def validate_change(c):
    """Check that c is a well formed change record.

    Raises a DiffFormatError if not well formed.
    """
    if not isinstance(c, Change):
        raise DiffFormatError("Change '{}' is not a change record.".format(c))
    if not isinstance(c.path, Path):
        raise DiffFormatError("Change path '{}' is not a Path.".format(c.path))
    for s in c.path:
        if not isinstance(s, (Field, Index, Identity)):
            raise DiffFormatError("Invalid path segment '{}'.".format(s))

    if c.kind == ChangeKind.ADDED:
        if c.old_value is not None:
            raise DiffFormatError("added change at '{}' has an old value.".format(c.path))
    elif c.kind == ChangeKind.REMOVED:
        if c.new_value is not None:
            raise DiffFormatError("removed change at '{}' has a new value.".format(c.path))
    elif c.kind == ChangeKind.MODIFIED:
        pass  # old and new can be any tree values, including null
    elif c.kind == ChangeKind.REORDERED:
        if not (isinstance(c.old_index, int) and isinstance(c.new_index, int)):
            raise DiffFormatError(
                "reordered change at '{}' expects integer indices.".format(c.path))
        if c.old_index == c.new_index:
            raise DiffFormatError(
                "reordered change at '{}' does not move.".format(c.path))
        if not c.path or not isinstance(c.path[-1], Identity):
            raise DiffFormatError(
                "reordered change at '{}' must address an element by identity.".format(c.path))
    else:
        raise DiffFormatError("Unknown change kind '{}'.".format(c.kind))

    if c.kind != ChangeKind.REORDERED and (c.old_index is not None or c.new_index is not None):
        raise DiffFormatError(
            "{} change at '{}' carries array indices.".format(c.kind, c.path))
