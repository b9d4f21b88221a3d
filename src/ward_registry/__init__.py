"""Ward registry: hierarchical household reports and print-batch tracking."""
