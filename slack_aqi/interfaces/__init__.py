"""Inbound interfaces (HTTP API)."""
