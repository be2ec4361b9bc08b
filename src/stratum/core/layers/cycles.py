"""Loop detection over the layer dependency graph.

Rules that contradict each other (``a`` below ``b`` below ``a``) make the
allocation meaningless, so compilation proves the graph acyclic first.
Detection runs Tarjan's strongly connected components algorithm; any
component with more than one member is a loop.

Both traversals keep their own work stack instead of recursing, so long rule
chains do not run into the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .graph import LayerGraph, LayerT, Rules


def strongly_connected_components(graph: LayerGraph[LayerT]) -> List[List[LayerT]]:
    """Return the strongly connected components of ``graph``.

    Roots are visited in first-seen layer order and children in rule order,
    so the emission order is deterministic for a given rule list. Members of
    each component are listed in the order they were discovered.
    """
    index_of: Dict[LayerT, int] = {}
    low_link: Dict[LayerT, int] = {}
    on_stack: Set[LayerT] = set()
    stack: List[LayerT] = []
    components: List[List[LayerT]] = []

    def _discover(layer: LayerT) -> Tuple[LayerT, Iterator[LayerT]]:
        index_of[layer] = low_link[layer] = len(index_of)
        stack.append(layer)
        on_stack.add(layer)
        return layer, iter(graph.lowers_of(layer))

    for root in graph.layers:
        if root in index_of:
            continue
        work = [_discover(root)]
        while work:
            layer, children = work[-1]
            descended = False
            for child in children:
                if child not in index_of:
                    work.append(_discover(child))
                    descended = True
                    break
                if child in on_stack:
                    low_link[layer] = min(low_link[layer], index_of[child])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                low_link[parent] = min(low_link[parent], low_link[layer])

            if low_link[layer] == index_of[layer]:
                component: List[LayerT] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == layer:
                        break
                component.reverse()
                components.append(component)

    return components


def find_self_rule(rules: Rules[LayerT], graph: LayerGraph[LayerT]) -> Optional[LayerT]:
    """Return the first layer ruled to render below itself, if any."""
    for lower, upper in rules:
        if lower == upper:
            return lower
    for layer in graph.layers:
        if layer in graph.lowers_of(layer):
            return layer
    return None


def find_rule_conflict(
    rules: Rules[LayerT],
    graph: LayerGraph[LayerT],
) -> Optional[List[LayerT]]:
    """Return layers taking part in a loop, or ``None`` when there is none.

    A self rule ``(x, x)`` is reported as ``[x, x]``. Otherwise the members
    of the first non-trivial component are returned; when several loops
    exist, which one is reported follows component emission order.
    """
    looped = find_self_rule(rules, graph)
    if looped is not None:
        return [looped, looped]

    components = strongly_connected_components(graph)
    if len(components) == len(graph.layers):
        return None

    for component in components:
        if len(component) > 1:
            return component
    return None


def trace_loop(graph: LayerGraph[LayerT], members: Sequence[LayerT]) -> List[LayerT]:
    """Order a closed walk through ``members``, e.g. ``[a, b, c, a]``.

    Walks dependency edges restricted to the component, starting from its
    first member, until it steps back onto a layer already on the path.
    """
    if not members:
        return []
    if len(members) >= 2 and members[0] == members[1]:
        return [members[0], members[0]]

    allowed = set(members)
    path: List[LayerT] = [members[0]]
    position: Dict[LayerT, int] = {members[0]: 0}
    current = members[0]
    while True:
        # Every member of a strongly connected component has an edge that
        # stays inside it, so the walk always finds a next step.
        step = next(
            (lower for lower in graph.lowers_of(current) if lower in allowed),
            None,
        )
        if step is None:
            return list(members)
        if step in position:
            loop = path[position[step]:]
            loop.append(step)
            return loop
        position[step] = len(path)
        path.append(step)
        current = step


__all__ = [
    "find_rule_conflict",
    "find_self_rule",
    "strongly_connected_components",
    "trace_loop",
]
