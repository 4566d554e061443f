"""Shared pytest configuration for tern examples.

``example_app`` executes the ``app.py`` next to the requesting test in a
fresh module namespace, with ``TERN_DATABASE_URL`` pointed at a SQLite
file under the test's ``tmp_path``. Every test gets its own routes and
its own empty database.
"""

import importlib.util
from pathlib import Path

import pytest


def _load_module(app_path: Path):
    spec = importlib.util.spec_from_file_location(f"example_{app_path.parent.name}", app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(request: pytest.FixtureRequest, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """The ``app`` object from the sibling app.py, backed by a throwaway database."""
    monkeypatch.setenv("TERN_DATABASE_URL", f"sqlite:///{tmp_path / 'example.db'}")
    return _load_module(Path(request.path).parent / "app.py").app
