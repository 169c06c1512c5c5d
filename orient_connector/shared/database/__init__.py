"""
Database package: OrientDB connection handler.
"""

from .orient_handler import OrientHandler

__all__ = ["OrientHandler"]
