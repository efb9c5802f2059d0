"""Graph view module."""

from .graph import Graph, Node, NodeKind, topic_node_id

__all__ = ["Graph", "Node", "NodeKind", "topic_node_id"]
