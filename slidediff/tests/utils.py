# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from slidediff import diff
from slidediff.diff_format import ChangeKind, is_valid_changeset


def check_diff(a, b, **kwargs):
    "Check that diff(a, b) is well formed and return it."
    d = diff(a, b, **kwargs)
    assert is_valid_changeset(d)
    return d


def check_symmetric_diff(a, b, **kwargs):
    """Check that diff(a, b) and diff(b, a) mirror each other.

    Both must address the same paths, with additions and removals
    swapped and modified values exchanged.
    """
    d = check_diff(a, b, **kwargs)
    r = check_diff(b, a, **kwargs)
    assert sorted(map(str, d.paths())) == sorted(map(str, r.paths()))

    mirror = {
        ChangeKind.ADDED: ChangeKind.REMOVED,
        ChangeKind.REMOVED: ChangeKind.ADDED,
        ChangeKind.MODIFIED: ChangeKind.MODIFIED,
        ChangeKind.REORDERED: ChangeKind.REORDERED,
    }
    reverse = {(c.path, c.kind): c for c in r}
    for c in d:
        other = reverse[(c.path, mirror[c.kind])]
        assert other.old_value == c.new_value
        assert other.new_value == c.old_value
        if c.kind == ChangeKind.REORDERED:
            assert (other.old_index, other.new_index) == (c.new_index, c.old_index)
    return d, r


def kinds(changes):
    return [c.kind for c in changes]


def rendered_paths(changes):
    return [str(c.path) for c in changes]
