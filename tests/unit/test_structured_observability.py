"""Structured JSON logging for gateway operations."""
import json

import pytest

from diamond_gateway.observability.logging import configure_logging, get_logger


def _last_event(captured: str) -> dict[str, object]:
    return json.loads(captured.strip().splitlines()[-1])


def test_log_lines_are_json_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")

    get_logger("test").info("proposal_submitted", chain="mumbai", proposal_id=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    event = _last_event(captured.err)
    assert event["event"] == "proposal_submitted"
    assert event["chain"] == "mumbai"
    assert event["proposal_id"] == 3
    assert event["level"] == "info"
    assert "timestamp" in event


def test_sensitive_fields_are_redacted(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")

    get_logger("test").info("signer_loaded", address="0xabc", private_key="0xdeadbeef")

    event = _last_event(capsys.readouterr().err)
    assert event["private_key"] == "***REDACTED***"
    assert event["address"] == "0xabc"


def test_level_filter_drops_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING")

    get_logger("test").info("noise")
    get_logger("test").warning("chain_profile_fallback", requested_chain="mainnet")

    lines = capsys.readouterr().err.strip().splitlines()
    assert len(lines) == 1
    assert _last_event(lines[0])["event"] == "chain_profile_fallback"


def test_chain_fallback_is_logged(capsys: pytest.CaptureFixture[str]) -> None:
    from diamond_gateway.chains import resolve_profile

    configure_logging("INFO")
    resolve_profile("mainnet")

    event = _last_event(capsys.readouterr().err)
    assert event["event"] == "chain_profile_fallback"
    assert event["requested_chain"] == "mainnet"
    assert event["chain"] == "local"
