"""Formats domain - Accept parsing, content negotiation and format strings."""
