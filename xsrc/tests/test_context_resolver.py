#!/usr/bin/env python3

import pytest

from xsrc.pipeline.analyzer.context import ContextResolver, ContextTree, NodeKind, resolve
from xsrc.pipeline.errors import ContextResolutionError
from xsrc.pipeline.expression import ContextRef


@pytest.fixture
def tree():
    """client -> ~users -> ~budgets -> all"""
    tree = ContextTree()
    client = tree.add(NodeKind.CLIENT, "XSClient", "")
    client.attributes["url"] = "http://root"
    users = tree.add(NodeKind.APISET, "users", "~users", client)
    users.attributes["url"] = "http://root/users"
    budgets = tree.add(NodeKind.APISET, "budgets", "~users.~budgets", users)
    budgets.attributes["url"] = "http://root/users/budgets"
    action = tree.add(NodeKind.ACTION, "all", "~users.~budgets.all", budgets)
    action.attributes["method"] = "GET"
    return tree


class TestContextTree:
    def test_parent_links_are_indices(self, tree):
        assert len(tree) == 4
        assert tree.root.parent is None
        assert tree[3].parent == 2
        assert tree.parent_of(tree[3]) is tree[2]
        assert tree.parent_of(tree.root) is None

    def test_depth(self, tree):
        assert [tree.depth(tree[i]) for i in range(4)] == [0, 1, 2, 3]

    def test_single_root(self, tree):
        with pytest.raises(ValueError):
            tree.add(NodeKind.CLIENT, "Other", "")


class TestContextResolver:
    def test_one_hop_lands_on_parent(self, tree):
        action = tree[3]
        assert resolve(tree, action, ContextRef(1)) == "http://root/users/budgets"

    def test_hop_count_matches_depth(self, tree):
        action = tree[3]
        resolver = ContextResolver(tree)
        assert resolver.resolve(action, ContextRef(2)) == "http://root/users"
        assert resolver.resolve(action, ContextRef(3)) == "http://root"

    def test_one_past_the_root_fails(self, tree):
        action = tree[3]
        with pytest.raises(ContextResolutionError) as exc_info:
            resolve(tree, action, ContextRef(4))
        assert "past the root" in str(exc_info.value)
        assert exc_info.value.schema_path == "~users.~budgets.all"

    def test_zero_hops_reads_own_attributes(self, tree):
        assert resolve(tree, tree[3], ContextRef(0, "method")) == "GET"

    def test_missing_attribute(self, tree):
        with pytest.raises(ContextResolutionError) as exc_info:
            resolve(tree, tree[3], ContextRef(1, "method"))
        assert "No attribute 'method'" in str(exc_info.value)
        assert "on apiset ~users.~budgets" in str(exc_info.value)

    def test_missing_attribute_names_root(self, tree):
        with pytest.raises(ContextResolutionError) as exc_info:
            resolve(tree, tree[1], ContextRef(1, "data"))
        assert "on client (root)" in str(exc_info.value)

    def test_source_path_override(self, tree):
        with pytest.raises(ContextResolutionError) as exc_info:
            ContextResolver(tree).resolve(tree[1], ContextRef(2), "~users.$url")
        assert exc_info.value.schema_path == "~users.$url"

    def test_resolution_does_not_mutate(self, tree):
        before = [dict(tree[i].attributes) for i in range(len(tree))]
        resolve(tree, tree[3], ContextRef(2))
        assert [tree[i].attributes for i in range(len(tree))] == before


if __name__ == "__main__":
    pytest.main([__file__])
