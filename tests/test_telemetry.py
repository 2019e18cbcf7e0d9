from __future__ import annotations

import pytest

from bufcycle.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_get_logger_is_cached_until_reconfigured() -> None:
    first = telemetry.get_logger("bufcycle.test")
    assert telemetry.get_logger("bufcycle.test") is first

    telemetry.configure()

    assert telemetry.get_logger("bufcycle.test") is not first


def test_span_reraises_and_records_failure() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::boom", component=True, metadata={"buffer": 3}):
            raise RuntimeError("boom")


def test_span_handle_collects_metadata() -> None:
    with telemetry.span("test::ok", metadata={"buffer": 1}) as handle:
        handle.add_metadata("status", "activated")

    assert handle.metadata == {"buffer": "1", "status": "activated"}
    assert handle.component_name is None
