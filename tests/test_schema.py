from __future__ import annotations

import jsonschema
import pytest

from errtrail.result import Result
from errtrail.schema import load_schema, trail_validator


def test_validator_is_built_once() -> None:
    assert trail_validator() is trail_validator()
    assert trail_validator().schema == load_schema()


def test_validator_accepts_trail_and_extra_fields() -> None:
    trail_validator().validate({"code": "X", "reason": [["new"]], "where": ["f(a.py:1)"], "v": 2})


def test_validator_rejects_missing_code() -> None:
    with pytest.raises(jsonschema.ValidationError):
        trail_validator().validate({"reason": [], "where": []})


def test_result_ok_follows_error() -> None:
    good: Result[int, str] = Result.success(3)
    bad: Result[int, str] = Result.failure("nope")
    assert good.ok and good.value == 3 and good.error is None
    assert not bad.ok and bad.value is None and bad.error == "nope"
    assert good.value_or(0) == 3
    assert bad.value_or(0) == 0
