"""Elementary cycle enumeration (Johnson, 1975).

For each start node ``s`` in sorted order, the search only walks the
strongly connected part of the graph induced by nodes ``>= s``. Every
cycle found therefore starts at its lexicographically smallest node and
is reported exactly once.

References
----------
.. [Joh75] Johnson, D. B. (1975). "Finding all the elementary circuits of
   a directed graph." SIAM Journal on Computing 4(1), 77-84.
"""

from __future__ import annotations

from collections import defaultdict, deque

from repodeps.core.graph.model import DependencyGraph


def canonical_cycle(cycle: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Rotate a cycle so it starts at its lexicographically smallest node."""
    if not cycle:
        return ()
    start = min(range(len(cycle)), key=lambda i: cycle[i])
    return tuple(cycle[start:]) + tuple(cycle[:start])


def _reachable(start: str, adj: dict[str, list[str]], allowed: set[str]) -> set[str]:
    seen = {start}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for nxt in adj.get(cur, ()):
            if nxt in allowed and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def _unblock(node: str, blocked: set[str], blocked_by: dict[str, set[str]]) -> None:
    pending = [node]
    while pending:
        u = pending.pop()
        if u in blocked:
            blocked.discard(u)
            pending.extend(blocked_by.pop(u, ()))


def find_cycles(graph: DependencyGraph) -> list[tuple[str, ...]]:
    """Return every elementary cycle of ``graph`` in canonical, sorted order.

    A cycle ``("a", "b")`` means a -> b -> a. Self-dependencies are cycles
    of length one.
    """
    order = [node.name for node in graph.nodes]
    forward = {name: graph.successors(name) for name in order}
    backward: dict[str, list[str]] = defaultdict(list)
    for name, targets in forward.items():
        for succ in targets:
            backward[succ].append(name)

    cycles: list[tuple[str, ...]] = []

    for index, start in enumerate(order):
        allowed = set(order[index:])
        # Strongly connected component of ``start`` among nodes >= start.
        component = _reachable(start, forward, allowed) & _reachable(start, backward, allowed)
        if len(component) == 1 and start not in forward[start]:
            continue

        succs = {v: [w for w in forward[v] if w in component] for v in component}
        blocked: set[str] = {start}
        blocked_by: dict[str, set[str]] = defaultdict(set)
        path: list[str] = [start]
        # closed[i] is set once a cycle was found through path[i].
        closed: list[bool] = [False]
        stack = [iter(succs[start])]

        while stack:
            for w in stack[-1]:
                if w == start:
                    cycles.append(tuple(path))
                    closed[-1] = True
                elif w not in blocked:
                    path.append(w)
                    closed.append(False)
                    blocked.add(w)
                    stack.append(iter(succs[w]))
                    break
            else:
                stack.pop()
                v = path.pop()
                if closed.pop():
                    if closed:
                        closed[-1] = True
                    _unblock(v, blocked, blocked_by)
                else:
                    for w in succs[v]:
                        blocked_by[w].add(v)

    return sorted({canonical_cycle(c) for c in cycles})
