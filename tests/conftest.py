# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src/ to sys.path so `import personabot` works without installation.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # keep host settings from leaking into config defaults
    monkeypatch.delenv("PERSONABOT_DB_URL", raising=False)
    monkeypatch.delenv("PERSONABOT_LOG_LEVEL", raising=False)
