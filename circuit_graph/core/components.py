from enum import Enum
from typing import Annotated, ClassVar, Literal, Optional, Tuple, Union
from pydantic import BaseModel, Field, PrivateAttr, computed_field, ConfigDict


class TerminalsAlreadyAssignedError(Exception):
    """Exception raised when a component's terminals are assigned a second time."""
    pass


class Polarity(str, Enum):
    """Orientation of a source relative to its node1/node2 terminals."""
    NORMAL = "normal"
    INVERTED = "inverted"


class BaseComponent(BaseModel):
    """Record shared by every two-terminal component.

    The terminal nodes are owned by the circuit: they start out as None and
    are filled in once, when the component is added to a circuit.
    """
    name: str = Field(..., min_length=1, frozen=True, description="Unique name of the component within a circuit")
    current: Optional[float] = Field(None, description="Branch current resolved by a solver, in amperes")
    voltage: Optional[float] = Field(None, description="Voltage across the component resolved by a solver, in volts")

    _node1: Optional[int] = PrivateAttr(default=None)
    _node2: Optional[int] = PrivateAttr(default=None)

    model_config = ConfigDict(validate_assignment=True)

    @computed_field
    @property
    def node1(self) -> Optional[int]:
        """Id of the first terminal node."""
        return self._node1

    @computed_field
    @property
    def node2(self) -> Optional[int]:
        """Id of the second terminal node."""
        return self._node2

    @property
    def terminals_assigned(self) -> bool:
        return self._node1 is not None

    @property
    def terminals(self) -> Tuple[Optional[int], Optional[int]]:
        return self._node1, self._node2

    def assign_terminals(self, node1: int, node2: int) -> None:
        """Attach the component to two nodes. Can only happen once."""
        if self.terminals_assigned:
            raise TerminalsAlreadyAssignedError(
                f"Component '{self.name}' is already attached to nodes {self._node1}-{self._node2}"
            )
        self._node1 = node1
        self._node2 = node2


class ComponentModel(BaseModel):
    """Common behaviour of the component variants.

    Every variant carries its shared record in ``base`` plus its own
    parameters. Variants are combined into the closed ``Component`` union below.
    """
    base: BaseComponent = Field(..., frozen=True)
    is_directional: ClassVar[bool] = False

    model_config = ConfigDict(validate_assignment=True)

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def node1(self) -> Optional[int]:
        return self.base.node1

    @property
    def node2(self) -> Optional[int]:
        return self.base.node2

    @property
    def is_short_circuit(self) -> bool:
        """Check if component behaves as a short circuit (zero impedance)."""
        return False

    @property
    def is_open_circuit(self) -> bool:
        """Check if component behaves as an open circuit (infinite impedance)."""
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, nodes={self.node1}-{self.node2})"


class Resistor(ComponentModel):
    """Resistor component."""
    kind: Literal["resistor"] = "resistor"
    resistance: float = Field(..., description="Resistance value in ohms", ge=0)

    def __init__(self, name: Optional[str] = None, resistance: Optional[float] = None, **data):
        """Initialize resistor with positional arguments support."""
        if name is not None:
            data["base"] = BaseComponent(name=name)
        if resistance is not None:
            data["resistance"] = resistance
        super().__init__(**data)

    @property
    def is_short_circuit(self) -> bool:
        return self.resistance == 0.0

    @property
    def is_open_circuit(self) -> bool:
        return self.resistance == float('inf')


class Capacitor(ComponentModel):
    """Capacitor component."""
    kind: Literal["capacitor"] = "capacitor"
    capacitance: float = Field(..., description="Capacitance value in farads", ge=0)

    def __init__(self, name: Optional[str] = None, capacitance: Optional[float] = None, **data):
        """Initialize capacitor with positional arguments support."""
        if name is not None:
            data["base"] = BaseComponent(name=name)
        if capacitance is not None:
            data["capacitance"] = capacitance
        super().__init__(**data)

    @property
    def is_short_circuit(self) -> bool:
        return self.capacitance == float('inf')

    @property
    def is_open_circuit(self) -> bool:
        return self.capacitance == 0.0


class Inductor(ComponentModel):
    """Inductor component."""
    kind: Literal["inductor"] = "inductor"
    inductance: float = Field(..., description="Inductance value in henries", ge=0)

    def __init__(self, name: Optional[str] = None, inductance: Optional[float] = None, **data):
        """Initialize inductor with positional arguments support."""
        if name is not None:
            data["base"] = BaseComponent(name=name)
        if inductance is not None:
            data["inductance"] = inductance
        super().__init__(**data)

    @property
    def is_short_circuit(self) -> bool:
        return self.inductance == 0.0

    @property
    def is_open_circuit(self) -> bool:
        return self.inductance == float('inf')


class Source(ComponentModel):
    """Directional component whose polarity picks the positive terminal.

    With ``Polarity.NORMAL`` node1 is the positive (input) terminal and node2
    the negative (output) one; ``Polarity.INVERTED`` swaps them.
    """
    polarity: Polarity = Field(Polarity.NORMAL, description="Orientation relative to node1/node2")
    is_directional: ClassVar[bool] = True

    def positive_node(self) -> Optional[int]:
        """Returns the positive terminal, or None if the source is not attached yet."""
        if self.polarity is Polarity.NORMAL:
            return self.node1
        return self.node2

    def negative_node(self) -> Optional[int]:
        """Returns the negative terminal, or None if the source is not attached yet."""
        if self.polarity is Polarity.NORMAL:
            return self.node2
        return self.node1


class VoltageSource(Source):
    """Voltage source component."""
    kind: Literal["voltage-source"] = "voltage-source"
    voltage: float = Field(..., description="Voltage value in volts")

    def __init__(self, name: Optional[str] = None, voltage: Optional[float] = None,
                 polarity: Optional[Polarity] = None, **data):
        """Initialize voltage source with positional arguments support."""
        if name is not None:
            data["base"] = BaseComponent(name=name)
        if voltage is not None:
            data["voltage"] = voltage
        if polarity is not None:
            data["polarity"] = polarity
        super().__init__(**data)

    @property
    def is_short_circuit(self) -> bool:
        """Voltage source is short circuit if voltage = 0."""
        return self.voltage == 0.0


class CurrentSource(Source):
    """Current source component."""
    kind: Literal["current-source"] = "current-source"
    current: float = Field(..., description="Current value in amperes")

    def __init__(self, name: Optional[str] = None, current: Optional[float] = None,
                 polarity: Optional[Polarity] = None, **data):
        """Initialize current source with positional arguments support."""
        if name is not None:
            data["base"] = BaseComponent(name=name)
        if current is not None:
            data["current"] = current
        if polarity is not None:
            data["polarity"] = polarity
        super().__init__(**data)

    @property
    def is_open_circuit(self) -> bool:
        """Current source is open circuit if current = 0."""
        return self.current == 0.0

    def input_node(self) -> Optional[int]:
        return self.positive_node()

    def output_node(self) -> Optional[int]:
        return self.negative_node()


Component = Annotated[
    Union[Resistor, Capacitor, Inductor, VoltageSource, CurrentSource],
    Field(discriminator="kind"),
]

COMPONENT_TYPES = (Resistor, Capacitor, Inductor, VoltageSource, CurrentSource)
