from __future__ import annotations

from stratum.core.layers import allocate_base_indices, build_layer_graph


def test_chain_stacks_layers_one_above_another():
    graph = build_layer_graph([("bg", "content"), ("content", "modal")])
    assert allocate_base_indices(graph) == {"bg": 0, "content": 1, "modal": 2}


def test_layer_sits_above_its_tallest_dependency():
    graph = build_layer_graph([("a", "b"), ("c", "b")], {"a": 2, "c": 3})
    table = allocate_base_indices(graph)
    assert table["a"] == 0
    assert table["c"] == 0
    assert table["b"] == 3


def test_diamond_takes_the_longest_path():
    rules = [("base", "left"), ("base", "right"), ("left", "top"), ("right", "top")]
    graph = build_layer_graph(rules, {"left": 4})
    table = allocate_base_indices(graph)
    assert table == {"base": 0, "left": 1, "right": 1, "top": 5}


def test_table_follows_first_seen_layer_order():
    graph = build_layer_graph([("content", "modal"), ("bg", "content")])
    assert list(allocate_base_indices(graph)) == ["content", "modal", "bg"]


def test_seeded_layers_are_not_recomputed():
    graph = build_layer_graph([("bg", "content"), ("content", "modal")])
    table = allocate_base_indices(graph, {"bg": 10})
    assert table == {"bg": 10, "content": 11, "modal": 12}


def test_seeds_may_break_minimality_for_dependents():
    graph = build_layer_graph([("bg", "content"), ("content", "modal")])
    table = allocate_base_indices(graph, {"content": 50})
    assert table == {"bg": 0, "content": 50, "modal": 51}


def test_seeds_for_unknown_layers_are_ignored():
    graph = build_layer_graph([("bg", "content")])
    table = allocate_base_indices(graph, {"ghost": 3})
    assert table == {"bg": 0, "content": 1}


def test_every_rule_is_satisfied_and_minimal():
    rules = [
        ("ground", "shadow"),
        ("ground", "units"),
        ("shadow", "units"),
        ("units", "effects"),
        ("hud", "dialog"),
        ("effects", "hud"),
        ("ground", "dialog"),
    ]
    sizes = {"shadow": 2, "units": 5, "effects": 3}
    graph = build_layer_graph(rules, sizes)
    table = allocate_base_indices(graph)

    for lower, upper in rules:
        assert table[upper] >= table[lower] + graph.size_of(lower)

    for layer in graph.layers:
        lowers = graph.lowers_of(layer)
        if lowers:
            assert table[layer] == max(table[d] + graph.size_of(d) for d in lowers)
        else:
            assert table[layer] == 0


def test_deep_chain_allocates_without_recursion():
    size = 5000
    rules = [(i, i + 1) for i in range(size)]
    table = allocate_base_indices(build_layer_graph(rules))
    assert table[size] == size
    assert table[0] == 0
