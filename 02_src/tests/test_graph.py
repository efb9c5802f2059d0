"""Tests for the graph view and cycle detection."""

from topicflow.agents import IncAgent, PlusAgent
from topicflow.graph import Graph, NodeKind, topic_node_id
from topicflow.loader import MathExampleConfig
from topicflow.models import Message

from conftest import CaptureAgent


class TestGraphBuild:
    """Tests for Graph.create_from_topics()."""

    def test_nodes_and_edges(self, registry):
        """Test node ids and edge directions."""
        PlusAgent(["A", "B"], ["C"], registry)
        IncAgent(["C"], ["D"], registry)

        graph = Graph.from_registry(registry)

        assert {n.node_id for n in graph} == {
            "TA",
            "TB",
            "TC",
            "TD",
            "PlusAgent[A,B->C]",
            "IncAgent[C->D]",
        }
        edges = {(s.node_id, t.node_id) for s, t in graph.edges()}
        assert edges == {
            ("TA", "PlusAgent[A,B->C]"),
            ("TB", "PlusAgent[A,B->C]"),
            ("PlusAgent[A,B->C]", "TC"),
            ("TC", "IncAgent[C->D]"),
            ("IncAgent[C->D]", "TD"),
        }

    def test_bipartite(self, registry):
        """Test that every edge joins a TOPIC and an AGENT."""
        config = MathExampleConfig(registry=registry)
        config.create()
        try:
            graph = Graph.from_registry(registry)
            for source, target in graph.edges():
                assert {source.kind, target.kind} == {NodeKind.TOPIC, NodeKind.AGENT}
                if source.kind is NodeKind.TOPIC:
                    topic = registry.get_topic(source.node_id[1:])
                    assert target.node_id in {a.agent_id for a in topic.subs}
                else:
                    topic = registry.get_topic(target.node_id[1:])
                    assert source.node_id in {a.agent_id for a in topic.pubs}
        finally:
            config.close()

    def test_no_parallel_edges(self, registry):
        """Test that repeated subscribe does not duplicate edges."""
        agent = CaptureAgent("Cap")
        topic = registry.get_topic("A")
        topic.subscribe(agent)
        topic.subscribe(agent)
        topic.add_publisher(agent)

        graph = Graph.from_registry(registry)
        assert len(list(graph.edges())) == 2

    def test_snapshot_is_detached(self, registry):
        """Test that later registry changes do not alter the graph."""
        registry.get_topic("A")
        graph = Graph.from_registry(registry)
        registry.get_topic("B").subscribe(CaptureAgent("Late"))

        assert len(graph) == 1
        assert "TB" not in graph

    def test_empty_registry(self, registry):
        """Test an empty graph."""
        graph = Graph.from_registry(registry)
        assert len(graph) == 0
        assert not graph.has_cycles()
        assert graph.to_dict() == {"nodes": [], "edges": []}

    def test_to_dict(self, registry):
        """Test the API JSON shape."""
        IncAgent(["X"], ["Y"], registry)
        data = Graph.from_registry(registry).to_dict()

        assert {"id": "TX", "kind": "TOPIC"} in data["nodes"]
        assert {"id": "IncAgent[X->Y]", "kind": "AGENT"} in data["nodes"]
        assert {"from": "TX", "to": "IncAgent[X->Y]"} in data["edges"]
        assert {"from": "IncAgent[X->Y]", "to": "TY"} in data["edges"]

    def test_topic_node_id(self):
        """Test the topic prefix."""
        assert topic_node_id("R3") == "TR3"


class TestGraphCycles:
    """Tests for Graph.has_cycles()."""

    def test_dag(self, registry):
        """Test that a pipeline has no cycles."""
        PlusAgent(["A", "B"], ["C"], registry)
        IncAgent(["C"], ["D"], registry)
        assert not Graph.from_registry(registry).has_cycles()

    def test_two_agent_loop(self, registry):
        """Test A -> T1 -> B -> T2 -> A."""
        IncAgent(["T2"], ["T1"], registry)
        IncAgent(["T1"], ["T2"], registry)
        assert Graph.from_registry(registry).has_cycles()

    def test_self_loop(self, registry):
        """Test an agent feeding its own input."""
        IncAgent(["X"], ["X"], registry)
        assert Graph.from_registry(registry).has_cycles()

    def test_diamond_is_not_a_cycle(self, registry):
        """Test that converging paths are not mistaken for cycles."""
        IncAgent(["A"], ["B"], registry)
        IncAgent(["A"], ["C"], registry)
        PlusAgent(["B", "C"], ["D"], registry)
        assert not Graph.from_registry(registry).has_cycles()

    def test_long_chain(self, registry):
        """Test a deep acyclic chain, then close it into a loop."""
        for i in range(1000):
            IncAgent([f"T{i}"], [f"T{i + 1}"], registry)
        assert not Graph.from_registry(registry).has_cycles()

        IncAgent(["T1000"], ["T0"], registry)
        assert Graph.from_registry(registry).has_cycles()

    def test_math_example(self, registry, capture, wait_for):
        """Test the example graph: nodes, result and acyclicity."""
        config = MathExampleConfig(registry=registry)
        config.create()
        try:
            out = capture("R3")
            registry.get_topic("A").publish(Message(5.0))
            registry.get_topic("B").publish(Message(8.0))
            assert wait_for(lambda: out.numbers == [39.0])

            registry.get_topic("R3").unsubscribe(out)
            graph = Graph.from_registry(registry)
            for node_id in ("TA", "TB", "TR1", "TR2", "TR3", "Aplus", "Aminus", "Amul"):
                assert node_id in graph
            assert not graph.has_cycles()
        finally:
            config.close()
