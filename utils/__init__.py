"""Packing list helpers: range expansion, field-group extraction, ordering and lookups."""
