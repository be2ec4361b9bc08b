from __future__ import annotations

import logging

import pytest

from stratum import (
    LayerProvider,
    RuleConflictError,
    compile_layers,
    compile_layers_safe,
)
from stratum.core.exceptions import AbsentLayerError, IndexOutOfBoundsError


def test_compile_layers_stacks_a_chain():
    get_z_index = compile_layers([("bg", "content"), ("content", "modal")])
    assert get_z_index("bg") == 0
    assert get_z_index("content") == 1
    assert get_z_index("modal", 0) == 2
    assert get_z_index.z_index_dict == {"bg": 0, "content": 1, "modal": 2}
    assert isinstance(get_z_index.provider, LayerProvider)


def test_compile_layers_honors_sizes():
    get_z_index = compile_layers([("a", "b"), ("c", "b")], {"a": 2, "c": 3})
    assert get_z_index("b") == 3
    assert get_z_index("c", 2) == 2
    with pytest.raises(IndexOutOfBoundsError):
        get_z_index("c", 3)


def test_compile_layers_query_errors():
    get_z_index = compile_layers([("bg", "content")])
    with pytest.raises(AbsentLayerError):
        get_z_index("unknown")
    with pytest.raises(IndexOutOfBoundsError):
        get_z_index("bg", 1)


def test_attached_table_does_not_leak_into_queries():
    get_z_index = compile_layers([("bg", "content")])
    get_z_index.z_index_dict["content"] = 40
    assert get_z_index("content") == 1


def test_compile_layers_raises_on_loop():
    with pytest.raises(RuleConflictError) as exc_info:
        compile_layers([("a", "b"), ("b", "c"), ("c", "a")])
    err = exc_info.value
    assert isinstance(err, ValueError)
    assert set(err.layers) <= {"a", "b", "c"}
    assert len(err.layers) >= 2
    assert str(err).startswith("There is loop: ")
    assert err.loop[0] == err.loop[-1]


def test_self_rule_names_the_layer():
    with pytest.raises(RuleConflictError) as exc_info:
        compile_layers([("bg", "content"), ("x", "x")])
    err = exc_info.value
    assert err.layers == ("x", "x")
    assert str(err) == 'There is loop: "x" > "x"'
    assert err.to_json_error() == {
        "message": 'There is loop: "x" > "x"',
        "code": "RuleConflictError",
        "context": {"layers": ["x", "x"], "loop": ["x", "x"]},
    }


def test_compile_layers_safe_returns_failed_result_on_loop():
    result = compile_layers_safe([("a", "b"), ("b", "a")])
    assert not result.success
    assert result.value is None
    assert isinstance(result.error, RuleConflictError)
    with pytest.raises(RuleConflictError):
        result.unwrap()


def test_compile_layers_safe_returns_provider():
    result = compile_layers_safe([("bg", "content"), ("content", "modal")])
    assert result.success
    provider = result.unwrap()
    assert provider.get_layers_dict() == {"bg": 0, "content": 1, "modal": 2}


def test_unreferenced_layers_are_not_allocated():
    provider = compile_layers_safe([("bg", "content")], {"footer": 4}, {"footer": 9}).unwrap()
    assert "footer" not in provider
    assert not provider.get_safe("footer").success


def test_seeding_with_layers_dict_reproduces_queries():
    rules = [("ground", "units"), ("units", "effects"), ("ground", "hud"), ("effects", "hud")]
    sizes = {"units": 4, "effects": 2}
    first = compile_layers_safe(rules, sizes).unwrap()
    second = compile_layers_safe(rules, sizes, first.get_layers_dict()).unwrap()
    for layer in first:
        for index in range(first.get_size(layer)):
            assert second.get(layer, index) == first.get(layer, index)


def test_rules_accept_non_string_layer_ids():
    get_z_index = compile_layers([(1, 2), (2, 3)])
    assert get_z_index(3) == 2


def test_compile_logs_summary(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="stratum.core.layers.compiler")
    compile_layers([("bg", "content"), ("content", "modal")])
    assert "Compiled 2 layer rules into 3 layers" in caplog.text


def test_self_rule_given_as_iterator_is_rejected():
    result = compile_layers_safe(iter([("a", "b"), ("x", "x")]))
    assert not result.success
    assert isinstance(result.error, RuleConflictError)
    assert result.error.layers == ("x", "x")


def test_rules_given_as_generator_compile():
    rules = ((lower, upper) for lower, upper in [("bg", "content"), ("content", "modal")])
    get_z_index = compile_layers(rules)
    assert get_z_index.z_index_dict == {"bg": 0, "content": 1, "modal": 2}


def test_integral_float_sizes_are_kept():
    get_z_index = compile_layers([("a", "b")], {"a": 2.0})
    assert get_z_index("b") == 2
    assert get_z_index("a", 1) == 1
