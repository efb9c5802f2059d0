"""Bipartite topic/agent graph view with cycle detection."""

from enum import Enum
from typing import Iterator

from ..topics import TopicRegistry, get_registry


class NodeKind(str, Enum):
    """Node types of the bipartite view."""

    TOPIC = "TOPIC"
    AGENT = "AGENT"


def topic_node_id(topic_name: str) -> str:
    return "T" + topic_name


class Node:
    """Graph node with ordered, duplicate-free outgoing edges."""

    def __init__(self, node_id: str, kind: NodeKind):
        self.node_id = node_id
        self.kind = kind
        self._edges: list["Node"] = []

    @property
    def edges(self) -> list["Node"]:
        return list(self._edges)

    def add_edge(self, target: "Node") -> None:
        if target not in self._edges:
            self._edges.append(target)

    def __repr__(self) -> str:
        return f"Node({self.node_id!r}, {self.kind.value})"


class Graph:
    """Point-in-time snapshot of the registry wiring.

    Topic nodes are keyed ``"T" + name``; agent nodes by ``agent_id``. Edges
    run topic -> subscriber and publisher -> topic. The snapshot does not
    follow later changes to the registry.
    """

    def __init__(self):
        self._nodes: dict[str, Node] = {}

    @classmethod
    def from_registry(cls, registry: TopicRegistry | None = None) -> "Graph":
        graph = cls()
        graph.create_from_topics(registry)
        return graph

    def create_from_topics(self, registry: TopicRegistry | None = None) -> None:
        """Rebuild this graph from the registry's current topics."""
        registry = registry if registry is not None else get_registry()
        nodes: dict[str, Node] = {}

        def node_for(node_id: str, kind: NodeKind) -> Node:
            node = nodes.get(node_id)
            if node is None:
                node = Node(node_id, kind)
                nodes[node_id] = node
            return node

        for topic in registry.get_topics():
            topic_node = node_for(topic_node_id(topic.name), NodeKind.TOPIC)
            for agent in topic.subs:
                topic_node.add_edge(node_for(agent.agent_id, NodeKind.AGENT))
            for agent in topic.pubs:
                node_for(agent.agent_id, NodeKind.AGENT).add_edge(topic_node)

        self._nodes = nodes

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def get(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def edges(self) -> Iterator[tuple[Node, Node]]:
        for node in self._nodes.values():
            for target in node._edges:
                yield node, target

    def has_cycles(self) -> bool:
        """DFS from every node; a back-edge to a node on the current path is a cycle."""
        visited: set[str] = set()
        on_path: set[str] = set()

        for root in self._nodes.values():
            if root.node_id in visited:
                continue
            visited.add(root.node_id)
            on_path.add(root.node_id)
            # Explicit stack of (node, remaining edges)
            stack = [(root, iter(root._edges))]
            while stack:
                node, targets = stack[-1]
                target = next(targets, None)
                if target is None:
                    on_path.discard(node.node_id)
                    stack.pop()
                elif target.node_id in on_path:
                    return True
                elif target.node_id not in visited:
                    visited.add(target.node_id)
                    on_path.add(target.node_id)
                    stack.append((target, iter(target._edges)))
        return False

    def to_dict(self) -> dict:
        """JSON shape served to the UI."""
        return {
            "nodes": [{"id": n.node_id, "kind": n.kind.value} for n in self._nodes.values()],
            "edges": [{"from": s.node_id, "to": t.node_id} for s, t in self.edges()],
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
