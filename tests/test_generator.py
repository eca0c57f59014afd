"""Tests for warren.generator — full regeneration cycles on a real tree."""

from __future__ import annotations

from pathlib import Path

import pytest

from warren._errors import DiscoveryError, GenerationError
from warren.config import WarrenConfig
from warren.generator import GenerationResult, RouteGenerator, generate
from warren.observability import EventLog, RouteCollector, RoutesResolved

from .conftest import PAGE_DIR, write_page


@pytest.fixture
def generator(project: Path) -> RouteGenerator:
    return RouteGenerator(WarrenConfig(root=project))


# ---------------------------------------------------------------------------
# Single cycle
# ---------------------------------------------------------------------------


class TestGenerate:
    """One cycle produces the canonical route list."""

    def test_names(self, generator: RouteGenerator) -> None:
        result = generator.generate()
        assert result.names == ("Root", "NotFound", "About", "DocsSplats", "ListId", "Login")
        assert result.file_count == 4

    def test_first_cycle_all_added(self, generator: RouteGenerator) -> None:
        result = generator.generate()
        assert {n.name for n in result.diff.added} == {"About", "DocsSplats", "ListId", "Login"}
        assert result.diff.renamed == ()

    def test_node_lookup(self, generator: RouteGenerator) -> None:
        result = generator.generate()
        login = result.node("Login")
        assert login is not None
        assert login.layout_group == "builtin"
        assert result.node("Missing") is None

    def test_layouts_included(self, generator: RouteGenerator) -> None:
        result = generator.generate()
        assert [layout.import_name for layout in result.layouts] == ["BaseLayout", "BlankLayout"]

    def test_groups(self, generator: RouteGenerator, project: Path) -> None:
        write_page(project, "docs/layout.tsx")
        groups = generator.generate().groups
        assert [n.relative_glob for n in groups.layouts] == ["docs/layout.tsx"]
        assert len(groups.pages) == 4

    def test_idempotent(self, generator: RouteGenerator) -> None:
        first = generator.generate()
        second = generator.generate()
        assert first.names == second.names
        assert second.diff.is_empty
        assert generator.store.read_snapshot().keys() == {"About", "DocsSplats", "ListId", "Login"}

    def test_last_result(self, generator: RouteGenerator) -> None:
        assert generator.last_result is None
        result = generator.generate()
        assert generator.last_result is result

    def test_empty_project(self, tmp_path: Path) -> None:
        result = RouteGenerator(WarrenConfig(root=tmp_path)).generate()
        assert result.names == ("Root", "NotFound")
        assert result.file_count == 0

    def test_reuse_routes(self, project: Path) -> None:
        config = WarrenConfig(root=project, reuse_routes=("/report",))
        result = RouteGenerator(config).generate()
        report = result.node("Report")
        assert report is not None
        assert report.is_reuse is True
        assert "Report" not in RouteGenerator(config).store.read_snapshot()

    def test_resolved_event(self, project: Path) -> None:
        collector = RouteCollector(EventLog())
        RouteGenerator(WarrenConfig(root=project), collector=collector).generate()
        event = collector.log.latest(RoutesResolved)
        assert isinstance(event, RoutesResolved)
        assert event.total == 6
        assert event.files == 4
        assert event.conflicts == 0


# ---------------------------------------------------------------------------
# Across cycles
# ---------------------------------------------------------------------------


class TestRenameTracking:
    """Identity-based diffing across cycles."""

    def test_rename_detected(self, generator: RouteGenerator, project: Path) -> None:
        generator.generate()
        pages = project / PAGE_DIR
        (pages / "about.tsx").rename(pages / "company.tsx")

        result = generator.generate()
        assert result.diff.added == ()
        (item,) = result.diff.renamed
        assert item.old_name == "About"
        assert item.node.name == "Company"

    def test_delete_and_add(self, generator: RouteGenerator, project: Path) -> None:
        generator.generate()
        # Create first so the new file cannot reuse the old inode
        write_page(project, "contact.tsx")
        (project / PAGE_DIR / "about.tsx").unlink()

        result = generator.generate()
        assert [n.name for n in result.diff.added] == ["Contact"]
        assert result.diff.renamed == ()
        assert "About" not in result.names

    def test_snapshot_replaced(self, generator: RouteGenerator, project: Path) -> None:
        generator.generate()
        (project / PAGE_DIR / "about.tsx").unlink()
        generator.generate()
        assert "About" not in generator.store.read_snapshot()


class TestConflicts:
    """Name clashes are reported, never fatal."""

    def test_first_sorted_glob_survives(self, project: Path) -> None:
        write_page(project, "about/index.tsx")
        result = RouteGenerator(WarrenConfig(root=project)).generate()

        about = result.node("About")
        assert about is not None
        assert about.relative_glob == "about.tsx"
        (conflict,) = result.conflicts
        assert conflict.dropped[0].relative_glob == "about/index.tsx"

    def test_root_index_loses_to_builtin(self, project: Path) -> None:
        write_page(project, "index.tsx")
        result = RouteGenerator(WarrenConfig(root=project)).generate()
        root = result.node("Root")
        assert root is not None
        assert root.is_builtin is True
        assert result.conflicts[0].name == "Root"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    """A failed cycle leaves the previous snapshot in place."""

    def test_sink_failure(self, project: Path) -> None:
        def sink(_result: GenerationResult) -> None:
            msg = "disk full"
            raise OSError(msg)

        generator = RouteGenerator(WarrenConfig(root=project), on_generated=sink)
        with pytest.raises(GenerationError, match="disk full"):
            generator.generate()
        assert generator.store.read_snapshot() == {}
        assert generator.last_result is None

    def test_sink_receives_result(self, project: Path) -> None:
        seen: list[GenerationResult] = []
        generator = RouteGenerator(WarrenConfig(root=project), on_generated=seen.append)
        result = generator.generate()
        assert seen == [result]

    def test_discovery_failure(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(_config: WarrenConfig) -> tuple[()]:
            msg = "Failed to stat page file"
            raise DiscoveryError(msg)

        monkeypatch.setattr("warren.generator.discover_files", fail)
        generator = RouteGenerator(WarrenConfig(root=project))
        with pytest.raises(DiscoveryError):
            generator.generate()
        assert generator.store.read_snapshot() == {}


class TestRouteBackup:
    """Route metadata is merged into the route backup each cycle."""

    def test_meta_merged(self, project: Path) -> None:
        config = WarrenConfig(
            root=project,
            route_meta=lambda name: {"title": name} if name == "About" else None,
        )
        generator = RouteGenerator(config)
        generator.generate()
        assert generator.store.read_route_backup() == {
            "About": {"path": "/about", "layout": "base", "meta": {"title": "About"}},
        }

    def test_entries_kept_across_cycles(self, project: Path) -> None:
        generator = RouteGenerator(WarrenConfig(root=project, route_meta=lambda name: {"title": name}))
        generator.generate()
        (project / PAGE_DIR / "about.tsx").unlink()
        generator.generate()
        assert "About" in generator.store.read_route_backup()

    def test_no_meta_leaves_backup_empty(self, generator: RouteGenerator) -> None:
        generator.generate()
        assert generator.store.read_route_backup() == {}

    def test_unserializable_meta(self, project: Path) -> None:
        generator = RouteGenerator(WarrenConfig(root=project, route_meta=lambda _name: {"x": object()}))
        with pytest.raises(GenerationError, match="not JSON-serializable"):
            generator.generate()
        assert generator.store.read_snapshot() == {}
        assert generator.store.read_route_backup() == {}


# ---------------------------------------------------------------------------
# resolve() and module entry points
# ---------------------------------------------------------------------------


class TestResolve:
    """resolve() never touches persisted state."""

    def test_no_state_written(self, generator: RouteGenerator, project: Path) -> None:
        nodes, conflicts, file_count = generator.resolve()
        assert len(nodes) == 6
        assert conflicts == ()
        assert file_count == 4
        assert not (project / ".temp").exists()


class TestGenerateFunction:
    """warren.generate() loads config and prints a summary."""

    def test_summary_printed(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        result = generate(project)
        assert "About" in result.names
        err = capsys.readouterr().err
        assert "6 routes from 4 page files" in err

    def test_overrides(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        result = generate(project, reuse_routes=("/wip",))
        assert "Wip" in result.names
