from .core import Circuit, CircuitSettings, ElectricalGraph, CircuitSanityChecker
from .core.components import Polarity, Resistor, Capacitor, Inductor, VoltageSource, CurrentSource
from .core.circuit import CircuitError, InvalidNodeError, SelfConnectionError, DuplicateComponentError

__version__ = "0.1.0"

# Export the main classes that users will need
__all__ = [
    'Circuit',
    'CircuitSettings',
    'ElectricalGraph',
    'CircuitSanityChecker',
    'Polarity',
    'Resistor',
    'Capacitor',
    'Inductor',
    'VoltageSource',
    'CurrentSource',
    'CircuitError',
    'InvalidNodeError',
    'SelfConnectionError',
    'DuplicateComponentError',
]
