from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, model_validator


class WireConnection(BaseModel):
    """Back-reference from a node to a wire touching it."""
    kind: Literal["wire"] = "wire"
    wire_id: int = Field(..., ge=0, description="Id of the wire")

    model_config = ConfigDict(frozen=True)


class ComponentConnection(BaseModel):
    """Back-reference from a node to a component terminal touching it."""
    kind: Literal["component"] = "component"
    name: str = Field(..., description="Name of the component")

    model_config = ConfigDict(frozen=True)


ConnectionItem = Annotated[
    Union[WireConnection, ComponentConnection],
    Field(discriminator="kind"),
]


class Node(BaseModel):
    """A circuit vertex.

    Nodes are created by the circuit only, one per component terminal, and
    are identified by their dense zero-based ``id``.
    """
    id: int = Field(..., ge=0, frozen=True, description="Dense zero-based identity of the node")
    voltage: Optional[float] = Field(None, description="Node potential resolved by a solver, in volts")
    connected: List[ConnectionItem] = Field(default_factory=list, frozen=True)

    model_config = ConfigDict(validate_assignment=True)

    def add_connection(self, item: ConnectionItem) -> None:
        """Record that a wire or component touches this node. No deduplication."""
        self.connected.append(item)

    @property
    def wire_ids(self) -> List[int]:
        return [item.wire_id for item in self.connected if isinstance(item, WireConnection)]

    @property
    def component_names(self) -> List[str]:
        return [item.name for item in self.connected if isinstance(item, ComponentConnection)]


class Wire(BaseModel):
    """An ideal zero-impedance edge between two distinct nodes."""
    id: int = Field(..., ge=0)
    node1: int = Field(..., ge=0)
    node2: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_distinct_nodes(self) -> "Wire":
        if self.node1 == self.node2:
            raise ValueError(f"Wire {self.id} cannot connect node {self.node1} to itself")
        return self

    def other_end(self, node_id: int) -> int:
        """Returns the endpoint opposite to ``node_id``."""
        if node_id == self.node1:
            return self.node2
        if node_id == self.node2:
            return self.node1
        raise ValueError(f"Node {node_id} is not an endpoint of wire {self.id}")
