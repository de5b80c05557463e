from __future__ import annotations

import threading

from fastapi.testclient import TestClient
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from chirpy.metrics import MetricsMiddleware, RequestCounter, render_metrics_page


def test_counter_starts_at_zero() -> None:
    assert RequestCounter().read() == 0


def test_reset_returns_previous_value() -> None:
    counter = RequestCounter()
    for _ in range(5):
        counter.increment()

    assert counter.reset() == 5
    assert counter.read() == 0
    assert counter.reset() == 0


def test_concurrent_increments_are_not_lost() -> None:
    counter = RequestCounter()
    workers = 8
    per_worker = 2_500
    barrier = threading.Barrier(workers)

    def hammer() -> None:
        barrier.wait()
        for _ in range(per_worker):
            counter.increment()

    threads = [threading.Thread(target=hammer) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.read() == workers * per_worker


def test_independent_counters() -> None:
    first = RequestCounter()
    second = RequestCounter()
    first.increment()

    assert first.read() == 1
    assert second.read() == 0


def _build_wrapped_app(counter: RequestCounter) -> MetricsMiddleware:
    async def ok(_request):
        return PlainTextResponse("fine")

    async def boom(_request):
        raise RuntimeError("handler failed")

    inner = Starlette(routes=[Route("/ok", ok), Route("/boom", boom)])
    return MetricsMiddleware(inner, counter)


def test_middleware_counts_and_delegates() -> None:
    counter = RequestCounter()
    with TestClient(_build_wrapped_app(counter)) as client:
        response = client.get("/ok")
        missing = client.get("/nope")

    assert response.status_code == 200
    assert response.text == "fine"
    assert missing.status_code == 404
    assert counter.read() == 2


def test_middleware_counts_even_when_handler_fails() -> None:
    counter = RequestCounter()
    with TestClient(_build_wrapped_app(counter), raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert counter.read() == 1


def test_metrics_page_mentions_hits() -> None:
    page = render_metrics_page(42)
    assert "<h1>Welcome, Chirpy Admin</h1>" in page
    assert "Chirpy has been visited 42 times!" in page
