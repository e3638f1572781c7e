# main function to build a voltage source / resistor circuit and check its topology
import logging
from circuit_graph import Circuit, Polarity, Resistor, VoltageSource, CircuitError, CircuitSanityChecker


logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler()
    ]
)


def main():
    circuit = Circuit()

    circuit.add_component(VoltageSource("V1", 5.0, Polarity.NORMAL))
    circuit.add_component(Resistor("R1", 100.0))

    voltage_source = circuit.get_component("V1")
    resistor = circuit.get_component("R1")

    # close the loop: V1+ -> R1 -> V1-
    try:
        circuit.connect(voltage_source.positive_node(), resistor.node1)
        circuit.connect(resistor.node2, voltage_source.negative_node())
    except CircuitError as e:
        logging.error("❌ %s", e)
        return

    logging.info("✅ Circuit built: %s", circuit)

    checker = CircuitSanityChecker(circuit)
    checker.check_all(raise_on_error=False)
    checker.log_results()


if __name__ == "__main__":
    main()
