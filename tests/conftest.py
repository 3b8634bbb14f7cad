"""Shared pytest fixtures for stackscout tests."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from stackscout.config.settings import ScoutSettings
from stackscout.infrastructure.project import Project
from stackscout.plugins.manager import PluginManager
from stackscout.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    scout_level = logging.getLogger("stackscout").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("stackscout").setLevel(scout_level)
    disable_telemetry()


@pytest.fixture
def site_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An importable directory prepended to sys.path."""
    site = tmp_path / "site"
    site.mkdir()
    monkeypatch.syspath_prepend(str(site))
    return site


@pytest.fixture
def make_package(site_dir: Path) -> Callable[..., Path]:
    """Create an importable package, optionally shipping a usage-rules.md.

    Usage::

        make_package("ash", rules="# Ash rules")
    """

    def make(name: str, rules: str | None = None) -> Path:
        pkg = site_dir / name
        pkg.mkdir()
        (pkg / "__init__.py").write_text("", encoding="utf-8")
        if rules is not None:
            (pkg / "usage-rules.md").write_text(rules, encoding="utf-8")
        importlib.invalidate_caches()
        return pkg

    return make


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def project(project_root: Path) -> Project:
    """Project on an empty temp directory with no plugins."""
    settings = ScoutSettings.from_cli(project_root=project_root)
    pm = PluginManager()
    pm.discover_and_load()
    return Project(settings, plugin_manager=pm)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run CLI commands from *project_root* with no outside config in play."""
    monkeypatch.delenv("STACKSCOUT_CONFIG", raising=False)
    monkeypatch.chdir(project_root)
    return project_root
