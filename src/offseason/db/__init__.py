"""Offseason database access."""

from .client import get_service_client

__all__ = ["get_service_client"]
