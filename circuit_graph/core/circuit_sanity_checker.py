"""
Circuit sanity checker for detecting common electrical circuit topology issues.

The checks run on the junction graph of a Circuit: nodes joined by ideal wires
are collapsed into one junction and every component becomes an edge between
the junctions of its two terminals.
"""

import logging
from typing import Dict, List, Set, Tuple
import networkx as nx
from .circuit import Circuit
from .components import Component, VoltageSource, CurrentSource
from .electrical_graph import ElectricalGraph

class CircuitTopologyError(Exception):
    """Exception raised for circuit topology errors."""
    pass

def has_short_circuit_path(G: nx.MultiGraph, s, t, exclude_components: Set[str] = None):
    """Check if there is a short circuit path between two junctions."""
    if exclude_components is None:
        exclude_components = set()

    def edge_filter(u, v, k):
        component = G[u][v][k].get('component')
        return (component is not None and
                component.name not in exclude_components and
                component.is_short_circuit)

    H = nx.subgraph_view(G, filter_edge=edge_filter)
    return nx.has_path(H, s, t)

def has_current_path(G: nx.MultiGraph, s, t, exclude_components: Set[str] = None):
    """Check if there's a current path between two junctions (not blocked by open circuits)."""
    if exclude_components is None:
        exclude_components = set()

    def edge_filter(u, v, k):
        component = G[u][v][k].get('component')
        return (component is not None and
                component.name not in exclude_components and
                not component.is_open_circuit)

    H = nx.subgraph_view(G, filter_edge=edge_filter)
    return nx.has_path(H, s, t)

class CircuitSanityChecker:
    """
    Performs sanity checks on the topology of a Circuit.
    Uses NetworkX subgraph filtering for path analysis.
    """

    def __init__(self, circuit: Circuit):
        """
        Initialize the sanity checker with a circuit.

        Args:
            circuit: Circuit to check
        """
        self.circuit = circuit
        self.electrical_graph = ElectricalGraph(circuit)
        self.junction_map = self.electrical_graph.junction_map()
        self.graph = self._build_junction_graph()
        self.warnings = []
        self.errors = []

    def _build_junction_graph(self) -> nx.MultiGraph:
        graph = nx.MultiGraph()
        graph.add_nodes_from(set(self.junction_map.values()))
        for component in self.electrical_graph.components_list:
            graph.add_edge(self.junction_map[component.node1], self.junction_map[component.node2],
                           key=component.name, component=component)
        return graph

    def check_all(self, raise_on_error: bool = True) -> Dict[str, List[str]]:
        """
        Run all sanity checks on the circuit.

        Args:
            raise_on_error: If True, raise exception when errors are found

        Returns:
            Dictionary with 'errors' and 'warnings' lists
        """
        self.warnings.clear()
        self.errors.clear()

        self._check_short_circuited_voltage_sources()
        self._check_parallel_voltage_sources()
        self._check_open_circuit_current_sources()
        self._check_wire_shorted_components()
        self._check_dangling_terminals()

        result = {
            'errors': self.errors.copy(),
            'warnings': self.warnings.copy()
        }

        if self.errors and raise_on_error:
            error_msg = "Circuit topology errors found:\n" + "\n".join(self.errors)
            raise CircuitTopologyError(error_msg)

        return result

    def _get_components_by_type(self, component_type: type) -> List[Tuple[int, int, Component]]:
        """Get (junction, junction, component) triples of a specific type."""
        components = []
        for component in self.electrical_graph.components_list:
            if isinstance(component, component_type):
                components.append((self.junction_map[component.node1],
                                   self.junction_map[component.node2], component))
        return components

    def _check_short_circuited_voltage_sources(self):
        """Check for voltage sources whose terminals are joined by wires or short circuits."""
        for source_junction, target_junction, vs_component in self._get_components_by_type(VoltageSource):
            if has_short_circuit_path(self.graph, source_junction, target_junction, {vs_component.name}):
                self.errors.append(
                    f"Voltage source '{vs_component.name}' is short-circuited "
                    f"(nodes {vs_component.node1}-{vs_component.node2})"
                )

    def _check_parallel_voltage_sources(self):
        """Check for voltage sources connected across the same pair of junctions."""
        junction_pairs = {}
        for source_junction, target_junction, vs_component in self._get_components_by_type(VoltageSource):
            if source_junction == target_junction:
                continue
            pair = tuple(sorted([source_junction, target_junction]))
            junction_pairs.setdefault(pair, []).append(vs_component)

        for pair, components in junction_pairs.items():
            if len(components) > 1:
                comp_ids = [f"{comp.name}({comp.voltage}V)" for comp in components]
                self.errors.append(
                    f"Voltage sources connected in parallel: {comp_ids} "
                    f"(parallel voltage sources are not allowed regardless of voltage values)"
                )

    def _check_open_circuit_current_sources(self):
        """Check for current sources with no return path."""
        for source_junction, target_junction, cs_component in self._get_components_by_type(CurrentSource):
            if source_junction == target_junction:
                continue
            if not has_current_path(self.graph, source_junction, target_junction, {cs_component.name}):
                self.errors.append(
                    f"Current source '{cs_component.name}' is in open circuit "
                    f"(no current path between nodes {cs_component.node1}-{cs_component.node2})"
                )

    def _check_wire_shorted_components(self):
        """Warn about passive components and current sources bypassed by wires."""
        for component in self.electrical_graph.components_list:
            if isinstance(component, VoltageSource):
                continue
            if self.junction_map[component.node1] == self.junction_map[component.node2]:
                self.warnings.append(
                    f"Component '{component.name}' is shorted by wires "
                    f"(nodes {component.node1}-{component.node2})"
                )

    def _check_dangling_terminals(self):
        """Warn about component terminals that no wire reaches."""
        dangling = []
        for component in self.electrical_graph.components_list:
            for node_id in component.base.terminals:
                node = self.circuit.get_node_mut(node_id)
                if not node.wire_ids:
                    dangling.append(f"{component.name}:{node_id}")
        if dangling:
            self.warnings.append(f"Unconnected terminals: {dangling}")

    def log_results(self):
        """Log the sanity check results."""
        if self.errors:
            logging.error("Circuit topology errors:")
            for error in self.errors:
                logging.error(f"  - {error}")

        if self.warnings:
            logging.warning("Circuit topology warnings:")
            for warning in self.warnings:
                logging.warning(f"  - {warning}")

        if not self.errors and not self.warnings:
            logging.info("Circuit topology checks passed successfully")
