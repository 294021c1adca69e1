"""Pytest configuration and shared fixtures for cabinet designer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cabinet_designer.application import DesignSession
from cabinet_designer.domain import Cabinet, Orientation

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


# =============================================================================
# Shared cabinet fixtures
# =============================================================================


@pytest.fixture
def cabinet() -> Cabinet:
    """Empty 800 x 1800 x 500 carcass on a 100 plinth (interior 768 x 1668)."""
    return Cabinet(width=800, height=1800, depth=500, base=100)


@pytest.fixture
def shelved_cabinet(cabinet: Cabinet) -> Cabinet:
    """Carcass with one full-width shelf at 890.

    Sections: 0 is above the shelf (h=890), 1 is below it (y=906, h=762).
    """
    assert cabinet.add_divider(Orientation.HORIZONTAL, 890, 0, cabinet.interior_width)
    return cabinet


@pytest.fixture
def session() -> DesignSession:
    """Fresh design session on the default carcass."""
    return DesignSession.create(width=800, height=1800, depth=500, base=100)


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH
