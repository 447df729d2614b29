"""Tests for the format_result dispatcher and OutputSettings."""

import json

import pytest

from forcemap.output.formatters import OutputSettings, format_result
from forcemap.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert (s.json_output, s.quiet, s.verbose) == (False, False, False)

    def test_frozen(self) -> None:
        s = OutputSettings(json_output=True)
        with pytest.raises(AttributeError):
            s.quiet = True  # type: ignore[misc]


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_ok("layout", count=3), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["count"] == 3

    def test_json_mode_error(self) -> None:
        output = format_result(_err(msg="nope"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["error"]["message"] == "nope"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        json.loads(format_result(_ok(), settings=settings))

    def test_quiet_mode(self) -> None:
        result = _ok("layout", items=[{"id": "A"}, {"id": "B"}])
        assert format_result(result, settings=OutputSettings(quiet=True)) == "A\nB"

    def test_default_is_rich(self) -> None:
        output = format_result(_ok("anything", answer=42))
        assert "OK" in output
        assert "answer" in output
