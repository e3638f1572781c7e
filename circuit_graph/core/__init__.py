# circuit_graph/core/__init__.py

# Import from components.py
from .components import (
    Polarity, BaseComponent, Component, Resistor, Capacitor, Inductor,
    VoltageSource, CurrentSource, TerminalsAlreadyAssignedError
)

# Import from node.py
from .node import Node, Wire, ConnectionItem, WireConnection, ComponentConnection

# Import from circuit.py
from .circuit import Circuit, CircuitError, InvalidNodeError, SelfConnectionError, DuplicateComponentError

# Import from circuit_settings.py
from .circuit_settings import CircuitSettings

# Import from electrical_graph.py
from .electrical_graph import ElectricalGraph

# Import from circuit_sanity_checker.py
from .circuit_sanity_checker import CircuitSanityChecker, CircuitTopologyError

# Define what should be available when someone imports from circuit_graph.core
__all__ = [
    # Components
    'Polarity',
    'BaseComponent',
    'Component',
    'Resistor',
    'Capacitor',
    'Inductor',
    'VoltageSource',
    'CurrentSource',
    # Graph entities
    'Node',
    'Wire',
    'ConnectionItem',
    'WireConnection',
    'ComponentConnection',
    # Circuit
    'Circuit',
    'CircuitSettings',
    'ElectricalGraph',
    'CircuitSanityChecker',
    # Errors
    'CircuitError',
    'InvalidNodeError',
    'SelfConnectionError',
    'DuplicateComponentError',
    'TerminalsAlreadyAssignedError',
    'CircuitTopologyError',
]
