import pytest
from circuit_graph.core.circuit import Circuit
from circuit_graph.core.components import Resistor, VoltageSource, Polarity


@pytest.fixture
def circuit():
    return Circuit()


@pytest.fixture
def rv_circuit():
    """R1 on nodes 0-1 and V1 on nodes 2-3, no wires yet."""
    circuit = Circuit()
    circuit.add_component(Resistor("R1", 100.0))
    circuit.add_component(VoltageSource("V1", 5.0, Polarity.NORMAL))
    return circuit
