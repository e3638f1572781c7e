from pydantic import BaseModel, Field
from typing import Literal

class CircuitSettings(BaseModel):
    """
    Settings for building a circuit.

    Attributes:
        duplicate_names (Literal['replace', 'reject']): What happens when a component
            is added under a name that is already in use. 'replace' keeps the newest
            component and orphans the nodes of the old one, 'reject' raises
            DuplicateComponentError and leaves the circuit untouched.
    """
    duplicate_names: Literal['replace', 'reject'] = Field(
        default='replace',
        description="Policy for adding a component whose name is already in use"
    )
