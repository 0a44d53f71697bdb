# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Generic document tree values.

A document tree is made of plain json-like Python values:

    dict              object, fields kept in insertion order
    list (or tuple)   array
    str               string scalar
    int, float        number scalar
    bool              boolean scalar (never treated as a number)
    None              null scalar

Trees are never mutated by this package.
"""

import copy
import io
import json
import math


class NodeKind:
    "Collection of valid values returned by node_kind."
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def node_kind(value):
    "Return the NodeKind of a tree value."
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if value is None:
        return NodeKind.NULL
    raise TypeError("Unsupported tree value of type %s" % type(value).__name__)


def is_container(value):
    return isinstance(value, (dict, list, tuple))


def is_scalar(value):
    return not is_container(value)


def shape_mismatch(a, b):
    """Return True if a and b cannot be compared by recursion or value.

    That is object vs array, container vs scalar, or null vs non-null.
    """
    ka = node_kind(a)
    kb = node_kind(b)
    if ka == kb:
        return False
    if ka in (NodeKind.OBJECT, NodeKind.ARRAY) or kb in (NodeKind.OBJECT, NodeKind.ARRAY):
        return True
    return ka == NodeKind.NULL or kb == NodeKind.NULL


def scalar_equal(a, b):
    """Compare two scalars by value.

    Numbers compare by exact value regardless of int/float representation,
    booleans only equal booleans, and NaN equals NaN.
    """
    ka = node_kind(a)
    if ka != node_kind(b):
        return False
    if ka == NodeKind.NUMBER:
        if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
            return True
    return a == b


def tree_equal(a, b):
    "Deep structural equality of two trees."
    ka = node_kind(a)
    if ka != node_kind(b):
        return False
    if ka == NodeKind.OBJECT:
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not tree_equal(value, b[key]):
                return False
        return True
    if ka == NodeKind.ARRAY:
        return len(a) == len(b) and all(tree_equal(x, y) for x, y in zip(a, b))
    return scalar_equal(a, b)


def iter_fields(obj):
    "Iterate over (name, value) pairs of an object in stored order."
    return iter(obj.items())


def iter_elements(arr):
    "Iterate over (position, value) pairs of an array in stored order."
    return enumerate(arr)


def copy_tree(value):
    "Return an independent copy of a tree value."
    if is_scalar(value):
        return value
    return copy.deepcopy(value)


def validate_tree(value, path="/"):
    """Check that value is a well formed tree.

    Raises a TypeError naming the offending path otherwise.
    """
    kind = node_kind_at(value, path)
    if kind == NodeKind.OBJECT:
        for key, child in value.items():
            if not isinstance(key, str):
                raise TypeError("Object key %r at %s is not a string" % (key, path))
            validate_tree(child, path.rstrip("/") + "/" + key)
    elif kind == NodeKind.ARRAY:
        for i, child in enumerate(value):
            validate_tree(child, path.rstrip("/") + "/" + str(i))


def node_kind_at(value, path):
    try:
        return node_kind(value)
    except TypeError as e:
        raise TypeError("%s at %s" % (e, path))


def _reject_constant(name):
    raise ValueError("Invalid JSON constant %r in document" % name)


def loads(text):
    "Parse a json document into a tree, keeping field order."
    return json.loads(text, parse_constant=_reject_constant)


def load(f):
    """Read a json document into a tree.

    f can be a filename or a file-like object.
    """
    if isinstance(f, str):
        with io.open(f, encoding="utf-8") as fo:
            return loads(fo.read())
    return loads(f.read())
