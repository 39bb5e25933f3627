import pytest
from pydantic import ValidationError

from canopy import Composite, Leaf, NodeSpec, PathCollector, SizeCalculator, build_tree, run_visitor

SAMPLE = {
    "name": "root",
    "children": [
        {"name": "a.txt", "value": 120},
        {"name": "b.txt", "value": 2048},
        {
            "name": "sub",
            "children": [
                {"name": "c.txt", "value": 45},
                {"name": "d.txt", "value": 12},
            ],
        },
    ],
}


def test_build_sample_tree():
    root = build_tree(SAMPLE)
    assert isinstance(root, Composite)
    assert run_visitor(root, SizeCalculator()) == 2225
    assert run_visitor(root, PathCollector()) == [
        "root/a.txt",
        "root/b.txt",
        "root/sub/c.txt",
        "root/sub/d.txt",
    ]


def test_build_leaf_root():
    leaf = build_tree({"name": "solo", "value": 7})
    assert isinstance(leaf, Leaf)
    assert leaf.value == 7


def test_build_empty_composite():
    empty = build_tree({"name": "empty", "children": []})
    assert isinstance(empty, Composite)
    assert run_visitor(empty, SizeCalculator()) == 0


def test_build_from_nodespec_and_node_passthrough():
    spec = NodeSpec.model_validate(SAMPLE)
    assert run_visitor(build_tree(spec), SizeCalculator()) == 2225

    leaf = Leaf("ready", 3)
    assert build_tree(leaf) is leaf


def test_each_build_gives_fresh_nodes():
    first, second = build_tree(SAMPLE), build_tree(SAMPLE)
    assert first is not second
    assert first.get_child(0) is not second.get_child(0)


@pytest.mark.parametrize(
    "bad",
    [
        {"name": "both", "value": 1, "children": []},
        {"name": "neither"},
        {"name": "neg", "value": -5},
        {"name": "text", "value": "12"},
        {"name": "extra", "value": 1, "size": 3},
        {"value": 1},
        {"name": "root", "children": [{"name": "inner", "value": -1}]},
    ],
)
def test_invalid_specs_are_rejected(bad):
    with pytest.raises(ValidationError):
        build_tree(bad)
