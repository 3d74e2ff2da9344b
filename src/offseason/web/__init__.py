"""Offseason HTTP API."""
