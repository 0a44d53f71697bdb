# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

import pytest

from slidediff import diff, DiffConfig
from slidediff.diff_format import ChangeKind, ChangeSet, Path, Field, Identity
from slidediff.log import AmbiguousIdentityError

from .utils import check_diff, check_symmetric_diff, kinds, rendered_paths


def test_diff_modified_scalar():
    d = check_diff({"title": "A"}, {"title": "B"})
    assert isinstance(d, ChangeSet)
    assert len(d) == 1
    c = d[0]
    assert c.path == Path([Field("title")])
    assert str(c.path) == "title"
    assert c.kind == ChangeKind.MODIFIED
    assert (c.old_value, c.new_value) == ("A", "B")
    assert (c.old_index, c.new_index) == (None, None)


def test_diff_added_by_identity():
    a = {"items": [{"id": "x", "v": 1}]}
    b = {"items": [{"id": "x", "v": 1}, {"id": "y", "v": 2}]}
    d = check_diff(a, b)
    assert len(d) == 1
    assert d[0].kind == ChangeKind.ADDED
    assert str(d[0].path) == "items{id=y}"
    assert d[0].path[-1] == Identity("id", "y")
    assert d[0].new_value == {"id": "y", "v": 2}
    assert d[0].old_value is None


def test_diff_pure_reorder():
    a = {"items": [{"id": "x"}, {"id": "y"}]}
    b = {"items": [{"id": "y"}, {"id": "x"}]}
    d = check_diff(a, b)
    assert kinds(d) == [ChangeKind.REORDERED, ChangeKind.REORDERED]
    assert rendered_paths(d) == ["items{id=x}", "items{id=y}"]
    assert (d[0].old_index, d[0].new_index) == (0, 1)
    assert (d[1].old_index, d[1].new_index) == (1, 0)


def test_diff_identical_trees(base_deck):
    assert check_diff(base_deck, copy.deepcopy(base_deck)) == ChangeSet()
    assert len(diff({"a": 1, "b": [1, 2], "c": {"d": None}},
                    {"a": 1, "b": [1, 2], "c": {"d": None}})) == 0


@pytest.mark.parametrize("value", [
    None, True, 0, 1.5, "", "text", [], {}, [1, [2, [3]]],
    {"a": {"b": [{"id": "x", "v": [1, 2]}, {"id": "y"}]}},
])
def test_diff_reflexive(value):
    assert len(check_diff(value, copy.deepcopy(value))) == 0


def test_diff_reflexive_nan():
    t = {"x": float("nan"), "y": [float("nan")]}
    assert len(check_diff(t, copy.deepcopy(t))) == 0


def test_diff_decks(base_deck, modified_deck):
    d = check_diff(base_deck, modified_deck)
    assert rendered_paths(d) == [
        "revisionId",
        "slides{objectId=p1}.pageElements{objectId=title1}.shape.text.textElements[0].textRun.content",
        "slides{objectId=p1}.pageElements{objectId=note1}",
        "slides{objectId=p1}.pageElements{objectId=body1}",
        "slides{objectId=p2}",
        "slides{objectId=p4}",
        "slides{objectId=p3}",
    ]
    assert kinds(d) == [
        ChangeKind.MODIFIED,
        ChangeKind.MODIFIED,
        ChangeKind.ADDED,
        ChangeKind.REMOVED,
        ChangeKind.REORDERED,
        ChangeKind.ADDED,
        ChangeKind.REORDERED,
    ]
    assert d[1].old_value == "Q3 Results"
    assert d[1].new_value == "Q3 Results (final)"
    assert (d[4].old_index, d[4].new_index) == (1, 2)
    assert (d[6].old_index, d[6].new_index) == (2, 1)
    assert d[5].new_value == {"objectId": "p4", "pageElements": []}


def test_diff_symmetric(base_deck, modified_deck):
    check_symmetric_diff(base_deck, modified_deck)
    check_symmetric_diff(base_deck, modified_deck, config=DiffConfig(reorder="relative"))
    check_symmetric_diff({"a": [1, 2, 3], "b": {"c": 1}}, {"a": [1, 5], "d": True})
    check_symmetric_diff([{"id": "x"}, {"id": "y"}], [{"id": "y"}, {"id": "z"}])


def test_diff_does_not_mutate_inputs(base_deck, modified_deck):
    a = copy.deepcopy(base_deck)
    b = copy.deepcopy(modified_deck)
    diff(a, b)
    assert a == base_deck
    assert b == modified_deck


def test_diff_owns_values():
    a = {"x": {"y": [1, 2]}}
    b = {"x": [1, 2]}
    d = diff(a, b)
    a["x"]["y"].append(3)
    b["x"].append(3)
    assert d[0].old_value == {"y": [1, 2]}
    assert d[0].new_value == [1, 2]


def test_diff_deterministic(base_deck, modified_deck):
    assert diff(base_deck, modified_deck) == diff(base_deck, modified_deck)


@pytest.mark.parametrize("a, b", [
    ({"a": {"b": 1}}, {"a": [1]}),
    ({"a": [1]}, {"a": "1"}),
    ({"a": None}, {"a": 1}),
    ({"a": {}}, {"a": None}),
    ({"a": "1"}, {"a": 1}),
    ({"a": True}, {"a": 1}),
])
def test_diff_type_mismatch_is_modified(a, b):
    d = check_diff(a, b)
    assert len(d) == 1
    assert d[0].kind == ChangeKind.MODIFIED
    assert str(d[0].path) == "a"
    assert d[0].old_value == a["a"]
    assert d[0].new_value == b["a"]


def test_diff_root_mismatch():
    d = check_diff({"a": 1}, [1])
    assert len(d) == 1
    assert d[0].path == Path()
    assert str(d[0].path) == ""


def test_diff_numbers_by_value():
    assert len(diff({"n": 1}, {"n": 1.0})) == 0
    assert len(diff({"n": 0.1}, {"n": 0.10000000000000001})) == 0
    assert len(diff({"n": 1}, {"n": 1.5})) == 1


def test_diff_object_field_order():
    a = {"a": 1, "b": 2}
    b = {"c": 3, "b": 2, "d": 4}
    d = check_diff(a, b)
    assert rendered_paths(d) == ["a", "c", "d"]
    assert kinds(d) == [ChangeKind.REMOVED, ChangeKind.ADDED, ChangeKind.ADDED]


def test_diff_positional_arrays():
    d = check_diff({"v": [1, 2, 3]}, {"v": [1, 5]})
    assert rendered_paths(d) == ["v[1]", "v[2]"]
    assert kinds(d) == [ChangeKind.MODIFIED, ChangeKind.REMOVED]
    assert d[1].old_value == 3

    d = check_diff({"v": [1]}, {"v": [1, 2, 3]})
    assert rendered_paths(d) == ["v[1]", "v[2]"]
    assert kinds(d) == [ChangeKind.ADDED, ChangeKind.ADDED]


def test_diff_mixed_array_is_positional():
    a = [{"id": "x"}, 3]
    b = [3, {"id": "x"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["[0]", "[1]"]
    assert kinds(d) == [ChangeKind.MODIFIED, ChangeKind.MODIFIED]


def test_diff_empty_identity_is_positional():
    a = [{"id": ""}, {"id": "y"}]
    b = [{"id": "y"}, {"id": ""}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["[0].id", "[1].id"]


def test_diff_prefers_first_identity_key():
    a = [{"objectId": "o1", "id": "a"}, {"objectId": "o2", "id": "b"}]
    b = [{"objectId": "o2", "id": "b"}, {"objectId": "o1", "id": "c"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["{objectId=o1}", "{objectId=o1}.id", "{objectId=o2}"]
    assert kinds(d) == [ChangeKind.REORDERED, ChangeKind.MODIFIED, ChangeKind.REORDERED]


def test_diff_falls_back_to_next_identity_key():
    a = [{"id": "x", "objectId": "o1"}, {"id": "y"}]
    b = [{"id": "y"}, {"id": "x", "objectId": "o1"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["{id=x}", "{id=y}"]


def test_diff_custom_identity_keys():
    a = {"rows": [{"key": "k1", "v": 1}, {"key": "k2", "v": 2}]}
    b = {"rows": [{"key": "k2", "v": 2}, {"key": "k1", "v": 1}]}
    d = check_diff(a, b, config=DiffConfig(identity_keys=["key"]))
    assert kinds(d) == [ChangeKind.REORDERED, ChangeKind.REORDERED]
    d = check_diff(a, b)
    assert kinds(d) == [ChangeKind.MODIFIED] * 4


def test_diff_reorder_with_field_changes():
    a = {"items": [{"id": "x", "v": 1}, {"id": "y", "v": 2}]}
    b = {"items": [{"id": "y", "v": 2}, {"id": "x", "v": 10}]}
    d = check_diff(a, b)
    assert rendered_paths(d) == ["items{id=x}", "items{id=x}.v", "items{id=y}"]
    assert kinds(d) == [ChangeKind.REORDERED, ChangeKind.MODIFIED, ChangeKind.REORDERED]


def test_diff_permutation_has_no_spurious_additions():
    ids = ["a", "b", "c", "d", "e"]
    a = [{"id": i, "n": k} for k, i in enumerate(ids)]
    b = [a[2], a[0], a[4], a[1], a[3]]
    d = check_diff(a, copy.deepcopy(b))
    assert set(kinds(d)) == {ChangeKind.REORDERED}
    assert len(d) == 5


def test_diff_additions_follow_preceding_match():
    a = [{"id": "x"}, {"id": "y"}]
    b = [{"id": "w"}, {"id": "x"}, {"id": "v"}, {"id": "y"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["{id=w}", "{id=x}", "{id=v}", "{id=y}"]
    assert kinds(d) == [ChangeKind.ADDED, ChangeKind.REORDERED,
                        ChangeKind.ADDED, ChangeKind.REORDERED]


def test_diff_relative_reorder_ignores_shifts():
    a = [{"id": "x"}, {"id": "y"}]
    b = [{"id": "w"}, {"id": "x"}, {"id": "v"}, {"id": "y"}]
    d = check_diff(a, b, config=DiffConfig(reorder="relative"))
    assert rendered_paths(d) == ["{id=w}", "{id=v}"]
    assert kinds(d) == [ChangeKind.ADDED, ChangeKind.ADDED]

    a = [{"id": "x"}, {"id": "y"}, {"id": "z"}]
    b = [{"id": "y"}, {"id": "z"}, {"id": "x"}]
    d = check_diff(a, b, config=DiffConfig(reorder="relative"))
    # Every element changes its rank when x moves to the end
    assert kinds(d) == [ChangeKind.REORDERED] * 3


def test_diff_removed_by_identity():
    a = [{"id": "x"}, {"id": "y"}, {"id": "z"}]
    b = [{"id": "x"}, {"id": "z"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["{id=y}", "{id=z}"]
    assert kinds(d) == [ChangeKind.REMOVED, ChangeKind.REORDERED]
    d = check_diff(a, b, config=DiffConfig(reorder="relative"))
    assert kinds(d) == [ChangeKind.REMOVED]


def test_diff_duplicate_identities():
    a = {"items": [{"id": "a", "v": 1}, {"id": "a", "v": 2}]}
    b = {"items": [{"id": "a", "v": 1}, {"id": "a", "v": 3}]}
    d = check_diff(a, b)
    assert rendered_paths(d) == ["items[1].v"]
    assert (d[0].old_value, d[0].new_value) == (2, 3)


def test_diff_duplicate_identities_unpaired():
    a = [{"id": "a"}, {"id": "b"}, {"id": "a", "v": 1}]
    b = [{"id": "a"}, {"id": "b"}]
    d = check_diff(a, b)
    assert rendered_paths(d) == ["[2]"]
    assert kinds(d) == [ChangeKind.REMOVED]

    d = check_diff(b, a)
    assert rendered_paths(d) == ["[2]"]
    assert kinds(d) == [ChangeKind.ADDED]


def test_diff_duplicate_identities_distinct_paths():
    a = {"items": [{"id": "x"}, {"id": "y"}, {"id": "x", "v": 1}]}
    b = {"items": [{"id": "x"}, {"id": "x", "v": 2}, {"id": "x"}]}
    d = check_diff(a, b)
    assert rendered_paths(d) == ["items{id=y}", "items[1].v", "items[2]"]
    assert kinds(d) == [ChangeKind.REMOVED, ChangeKind.MODIFIED, ChangeKind.ADDED]

    d = check_diff(a, b, config=DiffConfig(atomic_paths=["/items/*"]))
    assert rendered_paths(d) == ["items{id=y}", "items[1]", "items[2]"]
    assert kinds(d) == [ChangeKind.REMOVED, ChangeKind.MODIFIED, ChangeKind.ADDED]
    assert d[1].old_value == {"id": "x", "v": 1}
    assert d[1].new_value == {"id": "x", "v": 2}


def test_diff_config_positional():
    a = {"items": [{"id": "x"}, {"id": "y"}]}
    b = {"items": [{"id": "y"}, {"id": "x"}]}
    d = diff(a, b, DiffConfig(alignment="positional"))
    assert rendered_paths(d) == ["items[0].id", "items[1].id"]


def test_diff_duplicate_identities_strict():
    a = {"items": [{"id": "a"}, {"id": "a"}]}
    b = {"items": [{"id": "a"}]}
    with pytest.raises(AmbiguousIdentityError) as e:
        diff(a, b, config=DiffConfig(strict=True))
    assert e.value.field == "id"
    assert e.value.key == "a"
    assert str(e.value.path) == "items"
    # The default tie-break does not raise
    diff(a, b)


def test_diff_positional_alignment_policy():
    a = {"items": [{"id": "x"}, {"id": "y"}]}
    b = {"items": [{"id": "y"}, {"id": "x"}]}
    d = check_diff(a, b, config=DiffConfig(alignment="positional"))
    assert rendered_paths(d) == ["items[0].id", "items[1].id"]

    d = check_diff(a, b, config=DiffConfig(alignment_paths={"/items": "positional"}))
    assert rendered_paths(d) == ["items[0].id", "items[1].id"]

    d = check_diff(a, b, config=DiffConfig(
        alignment="positional", alignment_paths={"/items": "identity"}))
    assert kinds(d) == [ChangeKind.REORDERED, ChangeKind.REORDERED]


def test_diff_ignore_paths(base_deck, modified_deck):
    d = check_diff(base_deck, modified_deck, config=DiffConfig(ignore_paths=["/revisionId"]))
    assert "revisionId" not in rendered_paths(d)
    assert len(d) == 6

    d = check_diff(base_deck, modified_deck, config=DiffConfig(
        ignore_paths=["/revisionId", "/slides/*/pageElements"]))
    assert rendered_paths(d) == [
        "slides{objectId=p2}",
        "slides{objectId=p4}",
        "slides{objectId=p3}",
    ]


def test_diff_atomic_paths(base_deck, modified_deck):
    d = check_diff(base_deck, modified_deck, config=DiffConfig(
        atomic_paths=["/slides/*/pageElements"]))
    assert rendered_paths(d)[:2] == [
        "revisionId",
        "slides{objectId=p1}.pageElements",
    ]
    c = d[1]
    assert c.kind == ChangeKind.MODIFIED
    assert c.old_value == base_deck["slides"][0]["pageElements"]
    assert c.new_value == modified_deck["slides"][0]["pageElements"]


def test_diff_atomic_unchanged_subtree():
    a = {"style": {"bold": True, "size": 1}}
    d = check_diff(a, copy.deepcopy(a), config=DiffConfig(atomic_paths=["/style"]))
    assert len(d) == 0


def test_diff_empty_arrays():
    assert len(check_diff({"a": []}, {"a": []})) == 0
    d = check_diff({"a": []}, {"a": [{"id": "x"}]})
    assert rendered_paths(d) == ["a{id=x}"]


def test_diff_from_path():
    d = diff({"v": 1}, {"v": 2}, path="slides{objectId=p1}")
    assert rendered_paths(d) == ["slides{objectId=p1}.v"]


def test_diff_deep_nesting():
    a = b = None
    for i in range(200):
        a = {"child": a}
        b = {"child": b}
    b = {"child": b}
    d = check_diff(a, b)
    assert len(d) == 1
    assert len(d[0].path) == 200


def test_diff_config_validation():
    with pytest.raises(ValueError):
        DiffConfig(alignment="fuzzy")
    with pytest.raises(ValueError):
        DiffConfig(reorder="sometimes")
    with pytest.raises(ValueError):
        DiffConfig(alignment_paths={"/slides": "fuzzy"})
