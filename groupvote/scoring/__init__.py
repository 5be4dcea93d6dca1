"""Per-candidate scoring: vote weights, reasons, aggregation, consensus and trend."""
