"""
Tests for the circuit sanity checker module.
"""

import logging
import pytest
from circuit_graph.core.circuit import Circuit
from circuit_graph.core.components import Resistor, Capacitor, VoltageSource, CurrentSource
from circuit_graph.core.circuit_sanity_checker import (
    CircuitSanityChecker, CircuitTopologyError,
    has_short_circuit_path, has_current_path
)


def build(*components):
    circuit = Circuit()
    for component in components:
        circuit.add_component(component)
    return circuit


def test_closed_loop_passes():
    circuit = build(VoltageSource("V1", 5.0), Resistor("R1", 100.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)

    result = CircuitSanityChecker(circuit).check_all()
    assert result == {'errors': [], 'warnings': []}


def test_voltage_source_shorted_by_wire():
    circuit = build(VoltageSource("V1", 5.0))
    circuit.connect(0, 1)

    with pytest.raises(CircuitTopologyError, match="V1"):
        CircuitSanityChecker(circuit).check_all()


def test_voltage_source_shorted_by_zero_resistor():
    circuit = build(VoltageSource("V1", 5.0), Resistor("R0", 0.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)

    result = CircuitSanityChecker(circuit).check_all(raise_on_error=False)
    assert any("short-circuited" in error for error in result['errors'])


def test_parallel_voltage_sources():
    circuit = build(VoltageSource("V1", 5.0), VoltageSource("V2", 3.0))
    circuit.connect(0, 2)
    circuit.connect(1, 3)

    result = CircuitSanityChecker(circuit).check_all(raise_on_error=False)
    assert len(result['errors']) == 1
    assert "parallel" in result['errors'][0]
    assert "V1" in result['errors'][0] and "V2" in result['errors'][0]


def test_open_circuit_current_source():
    circuit = build(CurrentSource("I1", 1.0), Capacitor("C1", 0.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)

    result = CircuitSanityChecker(circuit).check_all(raise_on_error=False)
    assert any("I1" in error and "open circuit" in error for error in result['errors'])


def test_current_source_with_return_path():
    circuit = build(CurrentSource("I1", 1.0), Resistor("R1", 10.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)

    assert CircuitSanityChecker(circuit).check_all()['errors'] == []


def test_wire_shorted_resistor_warning():
    circuit = build(VoltageSource("V1", 5.0), Resistor("R1", 10.0), Resistor("R2", 10.0))
    circuit.connect(0, 2)
    circuit.connect(3, 1)
    circuit.connect(4, 5)
    circuit.connect(4, 0)

    result = CircuitSanityChecker(circuit).check_all()
    assert result['warnings'] == ["Component 'R2' is shorted by wires (nodes 4-5)"]


def test_dangling_terminals_warning():
    circuit = build(Resistor("R1", 10.0))

    result = CircuitSanityChecker(circuit).check_all()
    assert result['warnings'] == ["Unconnected terminals: ['R1:0', 'R1:1']"]


def test_path_helpers():
    circuit = build(Resistor("R1", 0.0), Resistor("R2", float('inf')))
    checker = CircuitSanityChecker(circuit)

    assert has_short_circuit_path(checker.graph, 0, 1)
    assert not has_short_circuit_path(checker.graph, 0, 1, {"R1"})
    assert not has_current_path(checker.graph, 2, 3)


def test_log_results(caplog):
    circuit = build(VoltageSource("V1", 5.0))
    circuit.connect(0, 1)
    checker = CircuitSanityChecker(circuit)
    checker.check_all(raise_on_error=False)

    with caplog.at_level(logging.INFO):
        checker.log_results()
    assert "Circuit topology errors" in caplog.text
    assert "V1" in caplog.text
