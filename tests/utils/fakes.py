from __future__ import annotations

from typing import Any, Callable


class FakeScheduler:
    """Manual clock for timer-driven code: callbacks run only on advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = 0

    def __call__(self, delay_s: float, callback: Callable[[], None]) -> None:
        self._seq += 1
        self._pending.append((self.now + delay_s, self._seq, callback))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, seconds: float) -> None:
        end = self.now + seconds
        while True:
            due = [p for p in self._pending if p[0] <= end + 1e-9]
            if not due:
                break
            item = min(due)
            self._pending.remove(item)
            self.now = item[0]
            item[2]()
        self.now = end


class FakeResponse:
    def __init__(self, status: int, text_data: str | bytes = "") -> None:
        self.status = status
        self._body = text_data.encode() if isinstance(text_data, str) else text_data

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def text(self, errors: str = "strict") -> str:
        return self._body.decode("utf-8", errors=errors)


class FakeSession:
    """Stands in for aiohttp.ClientSession; replays queued responses in order."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, Any]] = []
        self._responses: list[FakeResponse | BaseException] = []
        self.closed = False

    def queue_response(self, resp: FakeResponse | BaseException) -> None:
        self._responses.append(resp)

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json))
        assert self._responses, "No queued response"
        resp = self._responses.pop(0)
        if isinstance(resp, BaseException):
            raise resp
        return resp

    async def close(self) -> None:
        self.closed = True


class FakeDeviceClient:
    """Device API double. Set a result or an exception per call name."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.status: dict[str, Any] | BaseException = {}
        self.config: Any = {}
        self.results: dict[str, str | BaseException] = {}

    def _answer(self, value: Any) -> Any:
        if isinstance(value, BaseException):
            raise value
        return value

    async def get_status(self) -> dict[str, Any]:
        self.calls.append(("get_status", ()))
        return self._answer(self.status)

    async def get_config(self) -> Any:
        self.calls.append(("get_config", ()))
        return self._answer(self.config)

    async def start(self) -> str:
        self.calls.append(("start", ()))
        return self._answer(self.results.get("start", "OK"))

    async def stop(self) -> str:
        self.calls.append(("stop", ()))
        return self._answer(self.results.get("stop", "OK"))

    async def set_time(self, value: str) -> str:
        self.calls.append(("set_time", (value,)))
        return self._answer(self.results.get("set_time", "OK"))


class SpySynchronizer:
    """Counts out-of-band re-sync requests."""

    def __init__(self) -> None:
        self.polls = 0

    async def poll(self) -> bool:
        self.polls += 1
        return True
