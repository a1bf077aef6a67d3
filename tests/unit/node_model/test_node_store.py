"""Tests for node materialization and arena bookkeeping."""

from __future__ import annotations

import unittest

from faultnav.node_model import ExpansionState, NodeStore, parse_descriptor_list


def _descriptors(raw: list[dict]) -> list:
    return parse_descriptor_list("test", raw)


class NodeStoreTests(unittest.TestCase):
    def test_root_nodes_get_positional_keys_and_level_zero(self) -> None:
        store = NodeStore(
            _descriptors(
                [
                    {"title": "A", "type": "folder", "source": "a.json"},
                    {"title": "B", "type": "page"},
                ]
            )
        )

        self.assertEqual([node.key for node in store.roots], [0, 1])
        self.assertEqual([node.level for node in store.roots], [0, 0])
        self.assertIsNone(store.roots[0].parent)
        self.assertIs(store.roots[0].expansion_state, ExpansionState.COLLAPSED)
        self.assertIsNone(store.roots[1].expansion_state)
        self.assertEqual(len(store), 2)

    def test_build_children_links_parent_and_increments_level(self) -> None:
        store = NodeStore(_descriptors([{"title": "A", "type": "folder"}]))
        parent = store.roots[0]

        children = store.build_children(parent, _descriptors([{"title": "x", "type": "page"}, {"title": "y", "type": "page"}]))

        self.assertIs(parent.child_nodes, children)
        self.assertEqual([child.level for child in children], [1, 1])
        self.assertTrue(all(child.parent is parent for child in children))
        self.assertIs(store.get(children[1].node_id), children[1])

    def test_build_children_replaces_and_unregisters_previous_sequence(self) -> None:
        store = NodeStore(_descriptors([{"title": "A", "type": "folder"}]))
        parent = store.roots[0]
        first = store.build_children(parent, _descriptors([{"title": "x", "type": "page"}]))
        second = store.build_children(parent, _descriptors([{"title": "x", "type": "page"}]))

        self.assertIsNot(first[0], second[0])
        self.assertNotIn(first[0], store)
        self.assertIn(second[0], store)
        self.assertEqual(len(store), 2)

    def test_detach_children_removes_whole_subtree(self) -> None:
        store = NodeStore(_descriptors([{"title": "A", "type": "folder"}]))
        parent = store.roots[0]
        (child,) = store.build_children(parent, _descriptors([{"title": "B", "type": "folder"}]))
        child.set_state(ExpansionState.EXPANDED)
        (grandchild,) = store.build_children(child, _descriptors([{"title": "C", "type": "page"}]))

        store.detach_children(parent)

        self.assertEqual(parent.child_nodes, [])
        self.assertNotIn(child, store)
        self.assertNotIn(grandchild, store)
        self.assertIs(child.expansion_state, ExpansionState.COLLAPSED)
        self.assertEqual(len(store), 1)

    def test_detached_parent_cannot_gain_children(self) -> None:
        store = NodeStore(_descriptors([{"title": "A", "type": "folder"}]))
        parent = store.roots[0]
        (child,) = store.build_children(parent, _descriptors([{"title": "B", "type": "folder"}]))
        store.detach_children(parent)

        with self.assertRaises(ValueError):
            store.build_children(child, _descriptors([{"title": "C", "type": "page"}]))
        self.assertEqual(child.child_nodes, [])
        self.assertEqual(len(store), 1)

    def test_descriptors_are_shared_not_copied(self) -> None:
        descriptors = _descriptors([{"title": "A", "type": "page"}])
        store = NodeStore(descriptors)
        self.assertIs(store.roots[0].descriptor, descriptors[0])

    def test_iter_materialized_and_find_by_titles(self) -> None:
        store = NodeStore(_descriptors([{"title": "A", "type": "folder"}, {"title": "Z", "type": "page"}]))
        store.build_children(store.roots[0], _descriptors([{"title": "工装/设备", "type": "page"}]))

        self.assertEqual([node.title for node in store.iter_materialized()], ["A", "工装/设备", "Z"])
        self.assertEqual(store.find_by_titles(["A", "工装/设备"]).level, 1)
        self.assertIsNone(store.find_by_titles(["A", "missing"]))


if __name__ == "__main__":
    unittest.main()
