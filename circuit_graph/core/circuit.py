import logging
import operator
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union
from .components import Component, COMPONENT_TYPES, TerminalsAlreadyAssignedError
from .node import Node, Wire, WireConnection, ComponentConnection
from .circuit_settings import CircuitSettings


class CircuitError(Exception):
    """Base exception for illegal circuit mutations."""
    pass


class InvalidNodeError(CircuitError):
    """Raised when a node id does not exist in the circuit."""

    def __init__(self, node_id: int, node_count: int):
        self.node_id = node_id
        self.node_count = node_count
        super().__init__(f"Node {node_id} does not exist (circuit has {node_count} nodes)")


class SelfConnectionError(CircuitError):
    """Raised when a wire would connect a node to itself."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Cannot connect node {node_id} to itself")


class DuplicateComponentError(CircuitError):
    """Raised when a component name is already taken and duplicates are rejected."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Component name '{name}' is already in use")


class Circuit:
    """
    Graph of nodes, ideal wires and two-terminal components.

    The circuit owns every node, wire and component and is the only legal way
    to mutate them:
    - nodes are created two at a time by ``add_component``, one per terminal
    - wires are created by ``connect`` between existing, distinct nodes
    - every node keeps back-references to the wires/components touching it

    Nodes and wires are append-only. Components are keyed by name.
    """

    def __init__(self, settings: Optional[CircuitSettings] = None):
        """
        Initialize an empty circuit.

        Args:
            settings: CircuitSettings controlling the duplicate-name policy
        """
        self.settings = settings or CircuitSettings()
        self._nodes: List[Node] = []
        self._wires: Dict[int, Wire] = {}
        self._components: Dict[str, Component] = {}

    # Read-only views

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def wires(self) -> Mapping[int, Wire]:
        return MappingProxyType(self._wires)

    @property
    def components(self) -> Mapping[str, Component]:
        return MappingProxyType(self._components)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def wire_count(self) -> int:
        return len(self._wires)

    @property
    def component_count(self) -> int:
        return len(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __repr__(self) -> str:
        return (f"Circuit(nodes={self.node_count}, wires={self.wire_count}, "
                f"components={self.component_count})")

    # Mutation

    def _new_node(self) -> Node:
        """Append a node with the next dense id."""
        node = Node(id=len(self._nodes))
        self._nodes.append(node)
        return node

    def add_component(self, component: Component) -> None:
        """
        Add a component, allocating two fresh nodes for its terminals.

        Args:
            component: Resistor, Capacitor, Inductor, VoltageSource or CurrentSource
                that has not been added to any circuit yet

        Raises:
            TypeError: If ``component`` is not one of the component variants
            TerminalsAlreadyAssignedError: If the component is already attached
            DuplicateComponentError: If the name is taken and settings reject duplicates
        """
        if not isinstance(component, COMPONENT_TYPES):
            raise TypeError(f"Unsupported component type: {type(component).__name__}")
        if component.base.terminals_assigned:
            raise TerminalsAlreadyAssignedError(
                f"Component '{component.name}' is already attached to nodes "
                f"{component.node1}-{component.node2}"
            )

        name = component.name
        previous = self._components.get(name)
        if previous is not None:
            if self.settings.duplicate_names == 'reject':
                raise DuplicateComponentError(name)
            self._detach(previous)
            logging.warning(
                f"Component '{name}' replaced; nodes {previous.node1}-{previous.node2} are now orphaned"
            )

        node1 = self._new_node()
        node2 = self._new_node()
        component.base.assign_terminals(node1.id, node2.id)
        node1.add_connection(ComponentConnection(name=name))
        node2.add_connection(ComponentConnection(name=name))
        self._components[name] = component
        logging.debug(f"Added {component.kind} '{name}' on nodes {node1.id}-{node2.id}")

    def _detach(self, component: Component) -> None:
        """Drop the back-references of a component that is being replaced."""
        for node_id in component.base.terminals:
            node = self._nodes[node_id]
            node.connected[:] = [
                item for item in node.connected
                if not (isinstance(item, ComponentConnection) and item.name == component.name)
            ]

    def connect(self, node1: int, node2: int) -> Wire:
        """
        Join two existing nodes with an ideal wire.

        Args:
            node1: Id of the first node
            node2: Id of the second node

        Returns:
            Wire: The stored wire, whose id equals the wire count before the call

        Raises:
            InvalidNodeError: If either id is not a node of this circuit
            SelfConnectionError: If both ids are the same node
        """
        index1 = self._node_index(node1)
        if index1 is None:
            raise InvalidNodeError(node1, len(self._nodes))
        index2 = self._node_index(node2)
        if index2 is None:
            raise InvalidNodeError(node2, len(self._nodes))
        if index1 == index2:
            raise SelfConnectionError(index1)
        node1, node2 = index1, index2

        wire = Wire(id=len(self._wires), node1=node1, node2=node2)
        self._wires[wire.id] = wire
        self._nodes[node1].add_connection(WireConnection(wire_id=wire.id))
        self._nodes[node2].add_connection(WireConnection(wire_id=wire.id))
        logging.debug(f"Connected nodes {node1}-{node2} with wire {wire.id}")
        return wire

    # Lookup

    def _node_index(self, node_id) -> Optional[int]:
        """Returns ``node_id`` as a plain int if it names a node of this circuit, else None.

        Any integral type is accepted (numpy integers included); bools are not.
        """
        if isinstance(node_id, bool):
            return None
        try:
            index = operator.index(node_id)
        except TypeError:
            return None
        if 0 <= index < len(self._nodes):
            return index
        return None

    def get_component(self, name: str) -> Optional[Component]:
        """Returns a detached copy of the named component, or None."""
        component = self._components.get(name)
        return component.model_copy(deep=True) if component is not None else None

    def get_component_mut(self, name: str) -> Optional[Component]:
        """Returns the stored component itself, or None.

        Only solver results (``base.current``, ``base.voltage``) and the variant
        parameters can be written through it; ``base`` and its name are frozen
        and the terminals are read-only.
        """
        return self._components.get(name)

    def get_node(self, node_id: int) -> Optional[Node]:
        """Returns a detached copy of the node, or None if the id is out of range."""
        node = self.get_node_mut(node_id)
        return node.model_copy(deep=True) if node is not None else None

    def get_node_mut(self, node_id: int) -> Optional[Node]:
        """Returns the stored node itself, or None if the id is out of range."""
        index = self._node_index(node_id)
        if index is None:
            return None
        return self._nodes[index]

    def get_wire(self, wire_id: int) -> Optional[Wire]:
        return self._wires.get(wire_id)

    def connections_of(self, node_id: int) -> List[Union[Wire, Component]]:
        """
        Resolve the back-references of a node to the wires and components themselves.

        Raises:
            InvalidNodeError: If the node does not exist
        """
        index = self._node_index(node_id)
        if index is None:
            raise InvalidNodeError(node_id, len(self._nodes))
        resolved = []
        for item in self._nodes[index].connected:
            if isinstance(item, WireConnection):
                resolved.append(self._wires[item.wire_id])
            else:
                resolved.append(self._components[item.name])
        return resolved

    def check_invariants(self) -> None:
        """
        Verify the structural invariants of the whole graph.

        Raises:
            CircuitError: Describing the first violation found
        """
        for index, node in enumerate(self._nodes):
            if node.id != index:
                raise CircuitError(f"Node at index {index} has id {node.id}")

        expected: Dict[int, List] = {node.id: [] for node in self._nodes}
        for wire_id, wire in self._wires.items():
            if wire_id != wire.id:
                raise CircuitError(f"Wire stored under {wire_id} has id {wire.id}")
            if wire.node1 == wire.node2:
                raise CircuitError(f"Wire {wire.id} connects node {wire.node1} to itself")
            for node_id in (wire.node1, wire.node2):
                if node_id not in expected:
                    raise CircuitError(f"Wire {wire.id} references missing node {node_id}")
                expected[node_id].append(WireConnection(wire_id=wire.id))

        for name, component in self._components.items():
            if name != component.name:
                raise CircuitError(f"Component stored under '{name}' is named '{component.name}'")
            if not component.base.terminals_assigned:
                raise CircuitError(f"Component '{name}' has no terminals")
            if component.node1 == component.node2:
                raise CircuitError(f"Component '{name}' has both terminals on node {component.node1}")
            for node_id in component.base.terminals:
                if node_id not in expected:
                    raise CircuitError(f"Component '{name}' references missing node {node_id}")
                expected[node_id].append(ComponentConnection(name=name))

        for node in self._nodes:
            if sorted(map(repr, node.connected)) != sorted(map(repr, expected[node.id])):
                raise CircuitError(
                    f"Node {node.id} connections {node.connected} do not match {expected[node.id]}"
                )
