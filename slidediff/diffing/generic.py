# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..diff_format import ChangeSetBuilder, Path, Field
from ..tree import NodeKind, node_kind, shape_mismatch, scalar_equal, tree_equal

from .alignment import MATCH, REMOVE, ADD, align_arrays, moved_steps
from .config import DiffConfig

__all__ = ["diff"]


def diff(base, modified, config=None, *, path=None):
    """Compute the change set turning document tree base into modified.

    Neither tree is modified. The returned ChangeSet lists changes in
    depth-first document order and holds its own copies of all values.
    """
    if config is None:
        config = DiffConfig()
    if path is None:
        path = Path()
    elif not isinstance(path, Path):
        path = Path.parse(path)

    di = ChangeSetBuilder()
    diff_nodes(base, modified, path, config, di)
    return di.validated()


def diff_nodes(a, b, path, config, di):
    "Diff two tree nodes at path, appending changes to the builder di."
    if shape_mismatch(a, b):
        di.modified(path, a, b)
        return

    kind = node_kind(a)
    if kind == NodeKind.OBJECT:
        if config.is_atomic(path):
            if not tree_equal(a, b):
                di.modified(path, a, b)
        else:
            diff_objects(a, b, path, config, di)
    elif kind == NodeKind.ARRAY:
        if config.is_atomic(path):
            if not tree_equal(a, b):
                di.modified(path, a, b)
        else:
            diff_arrays(a, b, path, config, di)
    elif not scalar_equal(a, b):
        di.modified(path, a, b)


def diff_objects(a, b, path, config, di):
    """Diff two objects field by field.

    Fields are visited in the order of a, followed by fields
    only present in b in the order of b.
    """
    for key, avalue in a.items():
        subpath = path.child(Field(key))
        if config.is_ignored(subpath):
            continue
        if key not in b:
            di.removed(subpath, avalue)
        else:
            diff_nodes(avalue, b[key], subpath, config, di)

    for key, bvalue in b.items():
        if key in a:
            continue
        subpath = path.child(Field(key))
        if config.is_ignored(subpath):
            continue
        di.added(subpath, bvalue)


def diff_arrays(a, b, path, config, di):
    """Diff two arrays after aligning their elements.

    Elements matched by identity that changed position get a
    reordered change in addition to the changes found inside them.
    """
    steps = align_arrays(a, b, path, config)
    moved = moved_steps(steps, config.reorder)

    for step in steps:
        subpath = path.child(step.segment)
        if config.is_ignored(subpath):
            continue
        if step.op == MATCH:
            if step.base_index in moved:
                di.reordered(subpath, step.base_index, step.modified_index)
            diff_nodes(a[step.base_index], b[step.modified_index], subpath, config, di)
        elif step.op == REMOVE:
            di.removed(subpath, a[step.base_index])
        elif step.op == ADD:
            di.added(subpath, b[step.modified_index])
        else:
            raise RuntimeError("Unknown alignment step {}".format(step.op))
