from typing import Dict, FrozenSet, List, Tuple
import numpy as np
import networkx as nx
from .circuit import Circuit, InvalidNodeError
from .components import Component, Source


class ElectricalGraph:
    """
    Connectivity view of a Circuit for the analysis stage.

    This class handles:
    - a NetworkX MultiGraph of nodes, wires and components
    - junctions, i.e. sets of nodes merged by ideal wires
    - the junction/component incidence matrix

    The graph is a snapshot of the circuit taken at construction (and again by
    ``initialize``); later mutations of the circuit are not seen until then.
    """

    def __init__(self, circuit: Circuit):
        """
        Initialize the ElectricalGraph.

        Args:
            circuit: Circuit to analyse
        """
        self.circuit = circuit
        self.components_list = list(circuit)
        self.graph = self.build_graph()

        self.junction_list = None
        self.incidence_matrix = None

        self.initialized = False

    def initialize(self) -> None:
        """Compute junctions and the incidence matrix."""
        self.components_list = list(self.circuit)
        self.graph = self.build_graph()
        self.junction_list = self.junctions()
        self.incidence_matrix = self.compute_incidence_matrix()
        self.initialized = True

    def build_graph(self) -> nx.MultiGraph:
        """Build the NetworkX graph: one vertex per node, one edge per wire or component."""
        graph = nx.MultiGraph()
        for node in self.circuit.nodes:
            graph.add_node(node.id, node=node)
        for wire in self.circuit.wires.values():
            graph.add_edge(wire.node1, wire.node2, key=f"wire:{wire.id}", kind="wire", wire=wire)
        for component in self.components_list:
            graph.add_edge(component.node1, component.node2, key=f"component:{component.name}",
                           kind="component", component=component)
        return graph

    def wire_graph(self) -> nx.Graph:
        """Subgraph view containing only the wire edges."""
        return nx.subgraph_view(self.graph, filter_edge=lambda u, v, k: self.graph[u][v][k]["kind"] == "wire")

    def junctions(self) -> List[FrozenSet[int]]:
        """Sets of node ids joined by ideal wires, ordered by their smallest node id.

        Returns:
            List[FrozenSet[int]]: One set per junction, unwired nodes form singletons
        """
        groups = [frozenset(group) for group in nx.connected_components(self.wire_graph())]
        return sorted(groups, key=min)

    def junction_map(self) -> Dict[int, int]:
        """Map every node id to the index of its junction."""
        junctions = self.junction_list if self.initialized else self.junctions()
        return {node_id: index for index, group in enumerate(junctions) for node_id in group}

    def junction_of(self, node_id: int) -> int:
        """Returns the index of the junction holding ``node_id``."""
        mapping = self.junction_map()
        if node_id not in mapping:
            raise InvalidNodeError(node_id, self.circuit.node_count)
        return mapping[node_id]

    def are_connected(self, node1: int, node2: int) -> bool:
        """Check whether two nodes are joined through wires alone."""
        return self.junction_of(node1) == self.junction_of(node2)

    @staticmethod
    def oriented_terminals(component: Component) -> Tuple[int, int]:
        """Returns the (from, to) nodes of a component, resolving source polarity."""
        if isinstance(component, Source):
            return component.positive_node(), component.negative_node()
        return component.node1, component.node2

    def compute_incidence_matrix(self) -> np.ndarray:
        """Compute the junction/component incidence matrix.

        Returns:
            np.ndarray: Shape (junctions, components). +1 marks the junction of the
            positive terminal (node1 for non-directional components) and -1 the
            other one. Components whose terminals share a junction give an
            all-zero column.
        """
        mapping = self.junction_map()
        components = self.components_list
        n_junctions = len(set(mapping.values()))
        incidence_matrix = np.zeros((n_junctions, len(components)))

        for col, component in enumerate(components):
            source, target = self.oriented_terminals(component)
            source_idx = mapping[source]
            target_idx = mapping[target]
            if source_idx == target_idx:
                continue
            incidence_matrix[source_idx, col] = 1
            incidence_matrix[target_idx, col] = -1

        return incidence_matrix
