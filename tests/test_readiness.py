import asyncio

from conftest import FakeBackend

from propsearch_server.core.readiness import PROBE_BODY, check_endpoint, probe_inference_endpoint


def test_check_endpoint_sends_timeout_and_sample_payload() -> None:
    backend = FakeBackend()
    assert asyncio.run(check_endpoint(backend, ".elser-2-elasticsearch", 60)) is True
    assert backend.calls == [("infer", ".elser-2-elasticsearch", PROBE_BODY, 60)]


def test_check_endpoint_returns_false_on_error() -> None:
    backend = FakeBackend(error=ConnectionError("connection refused"))
    assert asyncio.run(check_endpoint(backend, ".elser-2-elasticsearch", 5)) is False
    # no retries
    assert len(backend.calls) == 1


def test_probe_skips_without_endpoint_id() -> None:
    backend = FakeBackend()
    assert asyncio.run(probe_inference_endpoint(backend, "")) is False
    assert backend.calls == []


def test_probe_never_raises() -> None:
    backend = FakeBackend(error=TimeoutError("timed out"))
    assert asyncio.run(probe_inference_endpoint(backend, ".elser-2-elasticsearch")) is False
