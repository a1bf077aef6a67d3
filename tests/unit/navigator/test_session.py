"""End-to-end navigation scenarios through ``NavigatorSession``."""

from __future__ import annotations

import asyncio
import tempfile
import unittest
from pathlib import Path

from faultnav.data_source import FALLBACK_ROOT, FileDataSource
from faultnav.errors import FetchError, ParseError
from faultnav.navigator import NavigatorSession, NullRenderer
from faultnav.node_model import ExpansionState, parse_descriptor_list
from faultnav.render import PLAIN_THEME, TerminalRenderer

FTA_TITLE = "FTA-重点关注"


class _FakeSource:
    def __init__(self, collections: dict[str, list[dict]]) -> None:
        self.collections = collections
        self.calls: list[str] = []
        self.failing: set[str] = set()
        self.malformed: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch(self, source_id: str):
        self.calls.append(source_id)
        gate = self.gates.get(source_id)
        if gate is not None:
            await gate.wait()
        if source_id in self.malformed:
            raise ParseError(source_id, "invalid JSON")
        if source_id in self.failing or source_id not in self.collections:
            raise FetchError(source_id, "unreachable", status=503)
        return parse_descriptor_list(source_id, self.collections[source_id])


class _RecordingRenderer(NullRenderer):
    def __init__(self) -> None:
        self.paths: list[list[str]] = []
        self.visibility: list[tuple[set[str], bool]] = []
        self.root_lists: list[list[str]] = []
        self.keywords: list[str] = []

    def on_node_list_changed(self, parent, children) -> None:
        if parent is None:
            self.root_lists.append([child.title for child in children])

    def on_visibility_set_changed(self, visible, has_any_match, *, keyword="") -> None:
        self.keywords.append(keyword)
        self.visibility.append(({node.title for node in visible}, has_any_match))

    def on_active_path_changed(self, chain) -> None:
        self.paths.append([node.title for node in chain])


def _scenario_source() -> _FakeSource:
    return _FakeSource(
        {
            "main": [{"title": FTA_TITLE, "type": "folder", "source": "a.json"}],
            "a.json": [{"title": "Leak", "type": "page", "rootCause": "seal wear", "notes": "check torque"}],
        }
    )


class NavigatorSessionTests(unittest.IsolatedAsyncioTestCase):
    async def test_expand_and_activate_page_yields_breadcrumb_and_notes(self) -> None:
        renderer = _RecordingRenderer()
        session = NavigatorSession(_scenario_source(), renderer=renderer)
        (root,) = await session.load_root()

        self.assertIs(await session.activate(root), ExpansionState.EXPANDED)
        leak = root.child_nodes[0]
        self.assertIsNone(await session.activate(leak))

        self.assertEqual(session.breadcrumb, "FTA-重点关注 > Leak")
        self.assertEqual(session.inherited_notes, ["check torque"])
        self.assertEqual(renderer.paths, [[FTA_TITLE], [FTA_TITLE, "Leak"]])
        self.assertIs(session.active_node, leak)

    async def test_activating_folder_twice_collapses_it(self) -> None:
        session = NavigatorSession(_scenario_source())
        (root,) = await session.load_root()

        await session.activate(root)
        self.assertIs(await session.activate(root), ExpansionState.COLLAPSED)
        self.assertEqual(root.child_nodes, [])
        self.assertEqual(session.breadcrumb, FTA_TITLE)

    async def test_root_fetch_failure_falls_back_to_builtin_collection(self) -> None:
        source = _scenario_source()
        source.failing.add("main")
        renderer = _RecordingRenderer()
        session = NavigatorSession(source, renderer=renderer)

        with self.assertLogs("faultnav.navigator.session", level="WARNING"):
            roots = await session.load_root()

        self.assertTrue(session.used_fallback)
        self.assertEqual([node.descriptor for node in roots], list(FALLBACK_ROOT))
        self.assertEqual(renderer.root_lists, [[item.title for item in FALLBACK_ROOT]])

    async def test_malformed_root_also_falls_back(self) -> None:
        source = _scenario_source()
        source.malformed.add("main")
        session = NavigatorSession(source, fallback=parse_descriptor_list("fb", [{"title": "Only", "type": "page"}]))

        with self.assertLogs("faultnav.navigator.session", level="WARNING"):
            roots = await session.load_root()

        self.assertEqual([node.title for node in roots], ["Only"])

    async def test_deeply_nested_root_file_falls_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "main.json").write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
            session = NavigatorSession(FileDataSource(tmp))

            with self.assertLogs("faultnav.navigator.session", level="WARNING"):
                roots = await session.load_root()

        self.assertTrue(session.used_fallback)
        self.assertEqual([node.descriptor for node in roots], list(FALLBACK_ROOT))

    async def test_unexpected_root_error_falls_back_and_logs_traceback(self) -> None:
        class _BrokenSource:
            async def fetch(self, source_id: str):
                raise RuntimeError("bug")

        session = NavigatorSession(_BrokenSource())

        with self.assertLogs("faultnav.navigator.session", level="ERROR"):
            roots = await session.load_root()

        self.assertTrue(session.used_fallback)
        self.assertEqual(len(roots), len(FALLBACK_ROOT))

    async def test_failed_folder_retries_on_next_activation(self) -> None:
        source = _scenario_source()
        source.failing.add("a.json")
        session = NavigatorSession(source)
        (root,) = await session.load_root()

        with self.assertLogs("faultnav.navigator.expansion", level="WARNING"):
            self.assertIs(await session.activate(root), ExpansionState.LOAD_ERROR)

        source.failing.clear()
        source.gates["a.json"] = asyncio.Event()
        retry = asyncio.create_task(session.activate(root))
        for _ in range(5):
            await asyncio.sleep(0)
        self.assertIs(root.expansion_state, ExpansionState.LOADING)
        source.gates["a.json"].set()
        self.assertIs(await retry, ExpansionState.EXPANDED)
        self.assertEqual(source.calls.count("a.json"), 2)

    async def test_search_before_expansion_reports_no_results(self) -> None:
        renderer = _RecordingRenderer()
        session = NavigatorSession(_scenario_source(), renderer=renderer)
        await session.load_root()

        result = session.set_filter("Leak")

        self.assertTrue(result.no_results)
        self.assertEqual(renderer.visibility[-1], (set(), False))

    async def test_active_filter_is_reapplied_after_expansion(self) -> None:
        renderer = _RecordingRenderer()
        session = NavigatorSession(_scenario_source(), renderer=renderer)
        (root,) = await session.load_root()
        session.set_filter("leak")

        await session.toggle(root)

        self.assertEqual(renderer.visibility[-1], ({FTA_TITLE, "Leak"}, True))
        self.assertIn(root, session.search.result.auto_expanded)
        self.assertEqual(renderer.keywords[-1], "leak")

    async def test_filter_reaches_terminal_renderer_without_extra_wiring(self) -> None:
        renderer = TerminalRenderer(theme=PLAIN_THEME)
        session = NavigatorSession(_scenario_source(), renderer=renderer)
        (root,) = await session.load_root()
        await session.toggle(root)

        session.set_filter("  LEAK ")

        self.assertEqual(renderer.search_query, "LEAK")
        self.assertEqual(renderer.render_lines(), ["▾ FTA-重点关注", "    Leak"])
        session.clear_filter()
        self.assertEqual(renderer.search_query, "")

    async def test_clear_filter_restores_full_visibility(self) -> None:
        renderer = _RecordingRenderer()
        session = NavigatorSession(_scenario_source(), renderer=renderer)
        (root,) = await session.load_root()
        await session.toggle(root)
        session.set_filter("nothing-matches")

        result = session.clear_filter()

        self.assertTrue(result.cleared)
        self.assertFalse(result.no_results)
        self.assertEqual(renderer.visibility[-1], ({FTA_TITLE, "Leak"}, True))
        self.assertIs(root.expansion_state, ExpansionState.EXPANDED)

    async def test_expand_path_opens_nested_folders(self) -> None:
        source = _FakeSource(
            {
                "main": [{"title": "工装/设备", "type": "folder", "source": "equipment.json"}],
                "equipment.json": [
                    {"title": "Press", "type": "folder", "children": [{"title": "Jam", "type": "page"}]}
                ],
            }
        )
        session = NavigatorSession(source)
        await session.load_root()

        press = await session.expand_path(["工装/设备", "Press"])

        self.assertEqual(press.title, "Press")
        self.assertIs(press.expansion_state, ExpansionState.EXPANDED)
        self.assertEqual(session.find(["工装/设备", "Press", "Jam"]).level, 2)

    async def test_expand_path_rejects_unknown_titles(self) -> None:
        session = NavigatorSession(_scenario_source())
        await session.load_root()
        with self.assertRaises(LookupError):
            await session.expand_path([FTA_TITLE, "Missing"])
        with self.assertRaises(LookupError):
            await session.expand_path(["Nope"])

    async def test_custom_breadcrumb_separator(self) -> None:
        session = NavigatorSession(_scenario_source(), breadcrumb_separator=" / ")
        (root,) = await session.load_root()
        await session.activate(root)
        await session.activate(root.child_nodes[0])
        self.assertEqual(session.breadcrumb, "FTA-重点关注 / Leak")


if __name__ == "__main__":
    unittest.main()
