"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from restaurant_finder.domain.models import Restaurant
from restaurant_finder.i18n import LocalizationTable


@pytest.fixture
def localization() -> LocalizationTable:
    return LocalizationTable()


@pytest.fixture
def restaurants() -> list[Restaurant]:
    return [
        Restaurant(name="Taqueria Uno", cuisine="Mexican", description="Street tacos."),
        Restaurant(name="Sushi Ko", cuisine="Japanese", description="Omakase counter."),
    ]
