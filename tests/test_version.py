from __future__ import annotations

import re
from pathlib import Path

from client.version import PACKAGE_NAME, PACKAGE_VERSION, USER_AGENT

ROOT = Path(__file__).resolve().parents[1]


def test_user_agent_matches_setup_metadata() -> None:
    setup_text = (ROOT / "setup.py").read_text(encoding="utf-8")
    name = re.search(r'name="([^"]+)"', setup_text)
    version = re.search(r'version="([^"]+)"', setup_text)
    assert name and name.group(1) == PACKAGE_NAME
    assert version and version.group(1) == PACKAGE_VERSION
    assert USER_AGENT == f"{PACKAGE_NAME}/{PACKAGE_VERSION}"
