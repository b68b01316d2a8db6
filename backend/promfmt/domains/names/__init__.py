"""Names domain - validation and escaping of metric and label names."""
