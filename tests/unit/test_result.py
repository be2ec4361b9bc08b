from __future__ import annotations

import pytest

from stratum.core.exceptions import AbsentLayerError, StratumError
from stratum.core.result import Result


def test_unwrap_returns_value():
    assert Result.ok(3).unwrap() == 3
    assert Result.ok(0).unwrap_or(5) == 0


def test_unwrap_raises_carried_error():
    with pytest.raises(AbsentLayerError):
        Result.fail(AbsentLayerError("ghost")).unwrap()


def test_failed_result_without_error_still_raises():
    with pytest.raises(StratumError, match="Result failed without an error"):
        Result(success=False).unwrap()
