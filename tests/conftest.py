"""Shared fixtures for the mintdocs test suite."""

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Return a helper that writes ``content`` to ``tmp_path/name``."""
    def _make_file(name: str, content: str = '', base=None):
        path = (base or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path
    return _make_file
