"""Domain layer: records, filters, ports and exceptions."""
