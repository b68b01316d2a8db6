"""Cross-cutting infrastructure: settings, logging, exceptions and protocols."""
