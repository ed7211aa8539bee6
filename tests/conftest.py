"""Pytest configuration for ncmpy."""

from __future__ import annotations

import os

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    del config
    if os.environ.get("NCMPY_CI") != "1":
        return
    skip_mpd = pytest.mark.skip(reason="Skipping MPD daemon tests in CI.")
    for item in items:
        if "mpd" in item.keywords:
            item.add_marker(skip_mpd)
