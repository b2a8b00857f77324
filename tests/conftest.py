import datetime as _dt

import pytest

from crossborder_vat import config


@pytest.fixture
def pin_today(monkeypatch):
    """Pin config.today() to a given ISO date."""
    def _pin(iso: str) -> _dt.date:
        monkeypatch.setattr(config, "AS_OF_OVERRIDE", iso)
        return _dt.date.fromisoformat(iso)
    return _pin
