"""Tests for telemetry: Span and @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from stackscout.services.result import ServiceResult
from stackscout.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_finish_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_finish(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.finish()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.finish()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "annotations" not in d

    def test_annotations(self) -> None:
        span = Span(name="root")
        span.annotate("found", 2)
        span.finish()
        assert span.to_dict()["annotations"] == {"found": 2}


class _Service:
    @traced
    def run(self, fail: bool = False) -> ServiceResult:
        span = get_current_span()
        if span is not None:
            span.annotate("fail", fail)
        if fail:
            raise RuntimeError("broken")
        return ServiceResult(ok=True, op="run", meta={"kept": True})

    @traced
    def plain(self) -> int:
        return 7


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        result = _Service().run()
        assert result.meta == {"kept": True}

    def test_no_span_when_disabled(self) -> None:
        assert get_current_span() is None

    def test_enabled_adds_telemetry(self) -> None:
        enable_telemetry()
        result = _Service().run()
        assert result.meta is not None
        assert result.meta["kept"] is True
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "_Service.run"
        assert telemetry["annotations"] == {"fail": False}

    def test_non_result_passes_through(self) -> None:
        enable_telemetry()
        assert _Service().plain() == 7

    def test_exception_propagates_and_resets_span(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError, match="broken"):
            _Service().run(fail=True)
        assert get_current_span() is None
