"""Structured Logging — JSONFormatter surfaces ledger extras."""

import json
import logging

from bankroll.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "bankroll.test", logging.INFO, __file__, 1, "Investment divested", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_ledger_fields():
    out = json.loads(JSONFormatter().format(
        _record(user_id="u-1", operation="divest_all", user_net=145.0),
    ))
    assert out["message"] == "Investment divested"
    assert out["user_id"] == "u-1"
    assert out["operation"] == "divest_all"
    assert out["user_net"] == 145.0


def test_json_formatter_omits_absent_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert "user_id" not in out
    assert out["level"] == "INFO"
