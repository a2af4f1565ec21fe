"""Turning uploaded files into retrievable text units."""
