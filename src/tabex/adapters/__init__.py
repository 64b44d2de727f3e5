"""Adapters – framework integrations."""
