from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from app.common import i18n
from app.common.render import MemoryRenderTarget
from app.services.notifications import NotificationCenter
from tests.utils.fakes import FakeDeviceClient, FakeScheduler

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def english_messages() -> Iterator[None]:
    """Tests compare against the English catalog regardless of IRRIGATION_UI_LANG."""
    previous = i18n.get_language()
    i18n.set_language("en")
    try:
        yield
    finally:
        i18n.set_language(previous)


@pytest.fixture
def target() -> MemoryRenderTarget:
    return MemoryRenderTarget()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def notifications(
    target: MemoryRenderTarget, scheduler: FakeScheduler
) -> NotificationCenter:
    return NotificationCenter(target, scheduler=scheduler)


@pytest.fixture
def store() -> dict[str, str]:
    """In-memory stand-in for the per-browser key/value storage."""
    return {}


@pytest.fixture
def device() -> FakeDeviceClient:
    return FakeDeviceClient()
