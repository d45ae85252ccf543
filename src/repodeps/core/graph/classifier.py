"""Node and edge color classification.

Colors are visual encodings of publish status and dependency source, not
a graph coloring in the algorithmic sense:

    Node (publish)       Edge (source)
    RESTRICTED -> black  PATH_LOCAL -> blue
    UNPUBLISHED -> blue  REGISTRY   -> black
    PUBLIC     -> green
    placeholder -> gray

Green nodes are the interesting ones: public packages a human may want to
double-check. That signal lives only in the rendered color.
"""

from __future__ import annotations

from enum import Enum

from repodeps.core.manifest.models import (
    DependencySource,
    Publish,
    PublishKind,
    SourceKind,
)


class NodeColor(str, Enum):
    BLACK = "black"
    BLUE = "blue"
    GREEN = "green"
    UNCLASSIFIED = "gray"


class EdgeColor(str, Enum):
    BLUE = "blue"
    BLACK = "black"


_NODE_COLORS: dict[PublishKind, NodeColor] = {
    PublishKind.RESTRICTED: NodeColor.BLACK,
    PublishKind.UNPUBLISHED: NodeColor.BLUE,
    PublishKind.PUBLIC: NodeColor.GREEN,
}

_EDGE_COLORS: dict[SourceKind, EdgeColor] = {
    SourceKind.PATH_LOCAL: EdgeColor.BLUE,
    SourceKind.REGISTRY: EdgeColor.BLACK,
}


def node_color(publish: Publish | None) -> NodeColor:
    """Return the color of a node given its manifest's publish status.

    Args:
        publish: Publish status, or None for placeholder nodes that have
            no manifest.

    Raises:
        ValueError: If the publish kind is not a known variant.
    """
    if publish is None:
        return NodeColor.UNCLASSIFIED
    try:
        return _NODE_COLORS[publish.kind]
    except KeyError:
        raise ValueError(f"Unknown publish kind: {publish.kind!r}") from None


def edge_color(source: DependencySource) -> EdgeColor:
    """Return the color of an edge given its declaration's source kind.

    Raises:
        ValueError: If the source kind is not a known variant.
    """
    try:
        return _EDGE_COLORS[source.kind]
    except KeyError:
        raise ValueError(f"Unknown dependency source kind: {source.kind!r}") from None
