# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Alignment of array elements between a base and a modified array.

An alignment is a list of AlignStep entries in emission order:

    ("match",  i,    j,    segment)  a[i] and b[j] are the same element
    ("remove", i,    None, segment)  a[i] has no counterpart in b
    ("add",    None, j,    segment)  b[j] has no counterpart in a

where segment is the path segment addressing the element.
"""

from collections import namedtuple
from itertools import chain

from ..diff_format import Index, Identity
from ..log import AmbiguousIdentityError, debug
from .config import ALIGN_IDENTITY, REORDER_RELATIVE

__all__ = ["align_arrays", "align_by_identity", "align_by_position",
           "find_identity_field", "moved_steps"]


MATCH = "match"
REMOVE = "remove"
ADD = "add"

AlignStep = namedtuple("AlignStep", ("op", "base_index", "modified_index", "segment"))


def find_identity_field(a, b, keys):
    """Return the first of keys usable as identity for all elements of a and b.

    A key is usable if every element of both arrays is an object holding
    a non-empty string under that key. Returns None if no key qualifies.
    """
    if not a and not b:
        return None
    for key in keys:
        if all(isinstance(x, dict) and isinstance(x.get(key), str) and x[key]
               for x in chain(a, b)):
            return key
    return None


def align_by_position(a, b):
    "Align elements by index, extra trailing elements are added or removed."
    n = min(len(a), len(b))
    steps = [AlignStep(MATCH, i, i, Index(i)) for i in range(n)]
    steps.extend(AlignStep(REMOVE, i, None, Index(i)) for i in range(n, len(a)))
    steps.extend(AlignStep(ADD, None, j, Index(j)) for j in range(n, len(b)))
    return steps


def _index_identities(arr, field, path, strict):
    """Map identity -> position of its first occurrence.

    Later occurrences of an identity are returned as a list of duplicate positions.
    """
    first = {}
    duplicates = []
    for i, x in enumerate(arr):
        key = x[field]
        if key in first:
            if strict:
                raise AmbiguousIdentityError(path, field, key)
            duplicates.append(i)
        else:
            first[key] = i
    return first, duplicates


def align_by_identity(a, b, field, path=None, strict=False):
    """Align elements of a and b by the value of their identity field.

    Elements sharing an identity are matched wherever they are.
    Duplicate identities keep the first occurrence, later duplicates
    are paired positionally among themselves and addressed by index:
    the modified position when b holds more duplicates, the base
    position otherwise.
    Elements only in b are placed right after the matched element
    preceding them in b.
    """
    afirst, adups = _index_identities(a, field, path, strict)
    bfirst, bdups = _index_identities(b, field, path, strict)

    # b index -> a index for every element present on both sides
    b_to_a = {}
    for key, j in bfirst.items():
        if key in afirst:
            b_to_a[j] = afirst[key]
    for i, j in zip(adups, bdups):
        b_to_a[j] = i
    a_to_b = {i: j for j, i in b_to_a.items()}
    adup_set = set(adups)
    # Unpaired duplicates are all on one side, addressing every duplicate
    # by its position on that side keeps the index segments distinct
    dups_by_modified = len(bdups) > len(adups)

    # Group additions by the matched b element they follow
    pending = {}
    anchor = None
    for j, x in enumerate(b):
        if j in b_to_a:
            anchor = j
            continue
        if x[field] in bfirst and bfirst[x[field]] == j:
            segment = Identity(field, x[field])
        else:
            segment = Index(j)
        pending.setdefault(anchor, []).append(AlignStep(ADD, None, j, segment))

    steps = list(pending.get(None, ()))
    for i, x in enumerate(a):
        j = a_to_b.get(i)
        if i not in adup_set:
            segment = Identity(field, x[field])
        elif dups_by_modified:
            segment = Index(j)
        else:
            segment = Index(i)
        if j is None:
            steps.append(AlignStep(REMOVE, i, None, segment))
        else:
            steps.append(AlignStep(MATCH, i, j, segment))
            steps.extend(pending.get(j, ()))
    return steps


def align_arrays(a, b, path, config):
    "Align two arrays using the policy configured for path."
    if config.alignment_at(path) == ALIGN_IDENTITY:
        field = find_identity_field(a, b, config.identity_keys)
        if field is not None:
            debug("Aligning %d/%d elements at %r by identity field %r",
                  len(a), len(b), str(path), field)
            return align_by_identity(a, b, field, path=path, strict=config.strict)
    debug("Aligning %d/%d elements at %r by position", len(a), len(b), str(path))
    return align_by_position(a, b)


def moved_steps(steps, mode):
    """Return the set of base indices of identity-matched elements that moved.

    With mode "absolute" an element moved if its index changed.
    With mode "relative" it moved if its rank among the elements present
    in both arrays changed, so insertions and removals alone move nothing.
    """
    matched = [s for s in steps if s.op == MATCH and isinstance(s.segment, Identity)]
    if mode != REORDER_RELATIVE:
        return {s.base_index for s in matched if s.base_index != s.modified_index}
    base_rank = {s.base_index: r for r, s in enumerate(
        sorted(matched, key=lambda s: s.base_index))}
    modified_rank = {s.base_index: r for r, s in enumerate(
        sorted(matched, key=lambda s: s.modified_index))}
    return {i for i in base_rank if base_rank[i] != modified_rank[i]}
