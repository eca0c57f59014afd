"""Tests for warren.content.watcher — change mapping and coalescing."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from watchfiles import Change

from warren.config import WarrenConfig
from warren.content.watcher import ChangeCoalescer, PageWatcher, page_change_for
from warren.generator import RouteGenerator
from warren.observability import EventLog, RegenerationTriggered, RouteCollector, WatchFailed

from .conftest import write_page

DEBOUNCE_MS = 20


# ---------------------------------------------------------------------------
# page_change_for
# ---------------------------------------------------------------------------


class TestPageChangeFor:
    """Only added/deleted page files produce a PageChange."""

    def test_added_page(self, config: WarrenConfig) -> None:
        path = config.root / "src/pages/list/[id].tsx"
        change = page_change_for(Change.added, path, config)
        assert change is not None
        assert change.kind == "created"
        assert change.glob == "list/[id].tsx"
        assert change.page_dir == "src/pages"

    def test_deleted_page(self, config: WarrenConfig) -> None:
        change = page_change_for(Change.deleted, config.root / "src/pages/about.tsx", config)
        assert change is not None
        assert change.kind == "deleted"

    def test_modified_ignored(self, config: WarrenConfig) -> None:
        assert page_change_for(Change.modified, config.root / "src/pages/about.tsx", config) is None

    def test_excluded_file_ignored(self, config: WarrenConfig) -> None:
        path = config.root / "src/pages/components/Button.tsx"
        assert page_change_for(Change.added, path, config) is None

    def test_non_page_extension_ignored(self, config: WarrenConfig) -> None:
        assert page_change_for(Change.added, config.root / "src/pages/style.css", config) is None

    def test_outside_page_dirs(self, config: WarrenConfig) -> None:
        assert page_change_for(Change.added, config.root / "src/other/a.tsx", config) is None

    def test_page_dir_itself(self, config: WarrenConfig) -> None:
        assert page_change_for(Change.deleted, config.root / "src/pages", config) is None


# ---------------------------------------------------------------------------
# ChangeCoalescer
# ---------------------------------------------------------------------------


class TestChangeCoalescer:
    """Bursts of events collapse into a single trigger."""

    @pytest.mark.asyncio
    async def test_burst_fires_once_with_latest(self) -> None:
        calls: list[str] = []
        coalescer = ChangeCoalescer(DEBOUNCE_MS, calls.append)

        coalescer.push("a.tsx")
        coalescer.push("b.tsx")
        coalescer.push("c.tsx")
        assert coalescer.state == "pending"
        assert coalescer.pending == frozenset({"a.tsx", "b.tsx", "c.tsx"})

        await asyncio.sleep(0.15)
        assert calls == ["c.tsx"]
        assert coalescer.state == "idle"
        assert coalescer.pending == frozenset()

    @pytest.mark.asyncio
    async def test_separate_bursts(self) -> None:
        calls: list[str] = []
        coalescer = ChangeCoalescer(DEBOUNCE_MS, calls.append)

        coalescer.push("a.tsx")
        await asyncio.sleep(0.15)
        coalescer.push("b.tsx")
        await asyncio.sleep(0.15)
        assert calls == ["a.tsx", "b.tsx"]

    @pytest.mark.asyncio
    async def test_idle_without_events(self) -> None:
        calls: list[str] = []
        coalescer = ChangeCoalescer(DEBOUNCE_MS, calls.append)
        await asyncio.sleep(0.1)
        assert calls == []
        assert coalescer.state == "idle"

    @pytest.mark.asyncio
    async def test_close_cancels_pending(self) -> None:
        calls: list[str] = []
        coalescer = ChangeCoalescer(DEBOUNCE_MS, calls.append)
        coalescer.push("a.tsx")
        coalescer.close()
        await asyncio.sleep(0.1)
        assert calls == []
        assert coalescer.closed is True
        assert coalescer.state == "idle"

    @pytest.mark.asyncio
    async def test_push_after_close_ignored(self) -> None:
        calls: list[str] = []
        coalescer = ChangeCoalescer(DEBOUNCE_MS, calls.append)
        coalescer.close()
        coalescer.push("a.tsx")
        await asyncio.sleep(0.1)
        assert calls == []
        assert coalescer.pending == frozenset()

    @pytest.mark.asyncio
    async def test_async_trigger(self) -> None:
        calls: list[str] = []

        async def on_trigger(path: str) -> None:
            calls.append(path)

        coalescer = ChangeCoalescer(DEBOUNCE_MS, on_trigger)
        coalescer.push("a.tsx")
        await asyncio.sleep(0.15)
        assert calls == ["a.tsx"]

    @pytest.mark.asyncio
    async def test_trigger_recorded(self) -> None:
        collector = RouteCollector(EventLog())
        coalescer = ChangeCoalescer(DEBOUNCE_MS, lambda _path: None, collector=collector)
        coalescer.push("a.tsx")
        coalescer.push("b.tsx")
        await asyncio.sleep(0.15)

        event = collector.log.latest(RegenerationTriggered)
        assert isinstance(event, RegenerationTriggered)
        assert event.trigger_path == "b.tsx"
        assert event.coalesced == 2

    @pytest.mark.asyncio
    async def test_sync_error_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        collector = RouteCollector(EventLog())

        def on_trigger(path: str) -> None:
            msg = f"boom {path}"
            raise RuntimeError(msg)

        coalescer = ChangeCoalescer(DEBOUNCE_MS, on_trigger, collector=collector)
        coalescer.push("a.tsx")
        await asyncio.sleep(0.15)

        assert "Regeneration error (a.tsx): boom a.tsx" in capsys.readouterr().err
        event = collector.log.latest(WatchFailed)
        assert isinstance(event, WatchFailed)
        assert event.trigger_path == "a.tsx"
        assert "RuntimeError" in event.error

        # The coalescer keeps working after a failure
        coalescer.push("b.tsx")
        await asyncio.sleep(0.15)
        assert len(collector.log.query(event_type=WatchFailed)) == 2

    @pytest.mark.asyncio
    async def test_async_error_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        collector = RouteCollector(EventLog())

        async def on_trigger(_path: str) -> None:
            msg = "async boom"
            raise ValueError(msg)

        coalescer = ChangeCoalescer(DEBOUNCE_MS, on_trigger, collector=collector)
        coalescer.push("a.tsx")
        await asyncio.sleep(0.15)

        assert "async boom" in capsys.readouterr().err
        assert collector.log.latest(WatchFailed) is not None


# ---------------------------------------------------------------------------
# PageWatcher
# ---------------------------------------------------------------------------


class TestPageWatcher:
    """Regeneration honors the exclude list."""

    @pytest.mark.asyncio
    async def test_regenerate_runs_cycle(self, project: Path) -> None:
        generator = RouteGenerator(WarrenConfig(root=project))
        watcher = PageWatcher(generator)
        await watcher._regenerate("about.tsx")
        assert generator.last_result is not None
        assert "About" in generator.last_result.names

    @pytest.mark.asyncio
    async def test_excluded_glob_skips_cycle(self, project: Path) -> None:
        generator = RouteGenerator(WarrenConfig(root=project))
        generator.store.init()
        generator.store.exclude_glob_path.write_text('["about.tsx"]')

        watcher = PageWatcher(generator)
        await watcher._regenerate("about.tsx")
        assert generator.last_result is None

        await watcher._regenerate("list/[id].tsx")
        assert generator.last_result is not None

    @pytest.mark.asyncio
    async def test_no_page_dirs(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        watcher = PageWatcher(RouteGenerator(WarrenConfig(root=tmp_path)))
        await watcher.run()
        assert "No page directories to watch." in capsys.readouterr().err
        assert watcher.is_running is False

    @pytest.mark.asyncio
    async def test_run_stops_on_event(self, project: Path) -> None:
        generator = RouteGenerator(WarrenConfig(root=project, debounce_ms=DEBOUNCE_MS))
        watcher = PageWatcher(generator)
        stop = asyncio.Event()

        task = asyncio.create_task(watcher.run(stop_event=stop))
        await asyncio.sleep(0.2)
        assert watcher.is_running is True

        write_page(project, "contact.tsx")
        for _ in range(50):
            await asyncio.sleep(0.1)
            if generator.last_result is not None:
                break

        stop.set()
        await asyncio.wait_for(task, timeout=5)
        assert watcher.is_running is False
        assert generator.last_result is not None
        assert "Contact" in generator.last_result.names
