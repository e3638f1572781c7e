import pytest
import numpy as np
import networkx as nx
from circuit_graph.core.circuit import Circuit, InvalidNodeError
from circuit_graph.core.components import Resistor, VoltageSource, Polarity
from circuit_graph.core.electrical_graph import ElectricalGraph


def create_loop_circuit(polarity=Polarity.NORMAL):
    """V1 on nodes 0-1, R1 on nodes 2-3, wired into a single loop."""
    circuit = Circuit()
    circuit.add_component(VoltageSource("V1", 5.0, polarity))
    circuit.add_component(Resistor("R1", 100.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)
    return circuit


def test_electrical_graph_initialization():
    """Test basic initialization of ElectricalGraph."""
    circuit = create_loop_circuit()
    electrical_graph = ElectricalGraph(circuit)

    assert electrical_graph.circuit is circuit
    assert electrical_graph.initialized is False
    assert electrical_graph.junction_list is None
    assert electrical_graph.incidence_matrix is None


def test_graph_structure():
    electrical_graph = ElectricalGraph(create_loop_circuit())
    graph = electrical_graph.graph

    assert isinstance(graph, nx.MultiGraph)
    assert sorted(graph.nodes()) == [0, 1, 2, 3]
    assert graph.number_of_edges() == 4
    kinds = sorted(data["kind"] for _, _, data in graph.edges(data=True))
    assert kinds == ["component", "component", "wire", "wire"]
    assert graph.nodes[2]["node"].id == 2


def test_junctions():
    electrical_graph = ElectricalGraph(create_loop_circuit())
    assert electrical_graph.junctions() == [frozenset({0, 2}), frozenset({1, 3})]
    assert electrical_graph.junction_of(2) == 0
    assert electrical_graph.junction_of(3) == 1
    assert electrical_graph.are_connected(0, 2)
    assert not electrical_graph.are_connected(0, 1)
    with pytest.raises(InvalidNodeError):
        electrical_graph.junction_of(9)


def test_unwired_nodes_are_singleton_junctions():
    circuit = Circuit()
    circuit.add_component(Resistor("R1", 1.0))
    assert ElectricalGraph(circuit).junctions() == [frozenset({0}), frozenset({1})]


def test_electrical_graph_initialize():
    """Test initialization method of ElectricalGraph."""
    electrical_graph = ElectricalGraph(create_loop_circuit())
    electrical_graph.initialize()

    assert electrical_graph.initialized is True
    assert len(electrical_graph.junction_list) == 2
    assert electrical_graph.incidence_matrix.shape == (2, 2)


def test_incidence_matrix():
    electrical_graph = ElectricalGraph(create_loop_circuit())
    expected = np.array([[1, 1], [-1, -1]])
    np.testing.assert_array_equal(electrical_graph.compute_incidence_matrix(), expected)


def test_incidence_matrix_follows_polarity():
    electrical_graph = ElectricalGraph(create_loop_circuit(Polarity.INVERTED))
    expected = np.array([[-1, 1], [1, -1]])
    np.testing.assert_array_equal(electrical_graph.compute_incidence_matrix(), expected)


def test_incidence_matrix_zero_column_for_shorted_component():
    circuit = Circuit()
    circuit.add_component(Resistor("R1", 1.0))
    circuit.connect(0, 1)
    matrix = ElectricalGraph(circuit).compute_incidence_matrix()
    assert matrix.shape == (1, 1)
    assert matrix[0, 0] == 0


def test_graph_is_a_snapshot():
    circuit = create_loop_circuit()
    electrical_graph = ElectricalGraph(circuit)
    circuit.add_component(Resistor("R2", 1.0))

    assert electrical_graph.graph.number_of_nodes() == 4
    electrical_graph.initialize()
    assert electrical_graph.graph.number_of_nodes() == 6
    assert electrical_graph.incidence_matrix.shape == (4, 3)
