"""Families domain - metric family data model and structural escaping."""
