"""Graphviz DOT rendering of a dependency graph.

Output is fully deterministic: nodes are sorted by name, edges by
(source, target), clusters by repository name. Two renders of the same
graph are byte-identical, which keeps the output diffable.

Example output::

    digraph G {
        node [shape=rectangle];
        "app" [color=green];
        "serde" [color=gray, style=dashed];
        "app" -> "serde" [color=black];
    }

Two layouts group packages by repository: ``cluster_by_repository`` draws
one filled ``cluster_<repository>`` box per repository, and
``color_by_repository`` fills each package with its repository's entry in
``REPOSITORY_PALETTE``. The border color is the classification color in
every layout.
"""

from __future__ import annotations

from collections import defaultdict

from repodeps.core.graph.model import DependencyGraph, GraphEdge, GraphNode
from repodeps.exceptions import RenderError

_INDENT = "    "

# Fill colors for ``color_by_repository``, assigned in repository name order.
REPOSITORY_PALETTE: tuple[str, ...] = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231", "#911eb4",
    "#46f0f0", "#f032e6", "#bcf60c", "#fabebe", "#008080", "#e6beff",
    "#9a6324", "#fffac8", "#800000", "#aaffc3", "#808000", "#ffd8b1",
    "#000075", "#808080", "#ffffff", "#000000",
)


def quote(name: str) -> str:
    """Quote an identifier for DOT, escaping backslashes and double quotes."""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _node_line(node: GraphNode, fill: str | None = None) -> str:
    attrs = f"color={node.color.value}"
    if node.is_placeholder:
        attrs += ", style=dashed"
    elif fill is not None:
        attrs += f", style=filled, fillcolor={quote(fill)}"
    return f"{quote(node.name)} [{attrs}];"


def _edge_line(edge: GraphEdge) -> str:
    return f"{quote(edge.source)} -> {quote(edge.target)} [color={edge.color.value}];"


def repository_fills(graph: DependencyGraph) -> dict[str, str]:
    """Assign a palette color to every repository that owns a node.

    Raises:
        RenderError: If there are more repositories than palette colors.
    """
    repos = sorted({node.repository for node in graph.nodes if node.repository})
    if len(repos) > len(REPOSITORY_PALETTE):
        raise RenderError(
            f"Asked for a color-based output while there are more repositories "
            f"({len(repos)}) than colors available ({len(REPOSITORY_PALETTE)})"
        )
    return dict(zip(repos, REPOSITORY_PALETTE))


def render(
    graph: DependencyGraph,
    *,
    cluster_by_repository: bool = False,
    color_by_repository: bool = False,
) -> str:
    """Render ``graph`` as a DOT ``digraph``.

    Args:
        graph: A fully built graph.
        cluster_by_repository: Group each repository's packages into a
            ``cluster_<repository>`` subgraph. Placeholder nodes stay at
            top level. Every node is still declared exactly once.
        color_by_repository: Fill each package with its repository's
            palette color. Placeholder nodes are not filled.

    Returns:
        The DOT text, newline-terminated.

    Raises:
        ValueError: If both layouts are requested.
        RenderError: If ``color_by_repository`` is set and the graph spans
            more repositories than ``REPOSITORY_PALETTE`` holds.
    """
    if cluster_by_repository and color_by_repository:
        raise ValueError("cluster_by_repository and color_by_repository are exclusive")

    lines = ["digraph G {", f"{_INDENT}node [shape=rectangle];"]

    if cluster_by_repository:
        by_repo: dict[str, list[GraphNode]] = defaultdict(list)
        loose: list[GraphNode] = []
        for node in graph.nodes:
            if node.repository:
                by_repo[node.repository].append(node)
            else:
                loose.append(node)
        for repo in sorted(by_repo):
            lines.append(f"{_INDENT}subgraph {quote('cluster_' + repo)} {{")
            lines.append(f"{_INDENT * 2}label = {quote(repo)};")
            lines.append(f"{_INDENT * 2}style = filled;")
            lines.extend(f"{_INDENT * 2}{_node_line(node)}" for node in by_repo[repo])
            lines.append(f"{_INDENT}}}")
        lines.extend(f"{_INDENT}{_node_line(node)}" for node in loose)
    elif color_by_repository:
        fills = repository_fills(graph)
        lines.extend(
            f"{_INDENT}{_node_line(node, fills.get(node.repository or ''))}"
            for node in graph.nodes
        )
    else:
        lines.extend(f"{_INDENT}{_node_line(node)}" for node in graph.nodes)

    lines.extend(f"{_INDENT}{_edge_line(edge)}" for edge in graph.edges)
    lines.append("}")
    return "\n".join(lines) + "\n"
