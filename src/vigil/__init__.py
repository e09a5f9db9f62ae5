"""Vigil: account security service (HTTP API and operator CLI)."""
