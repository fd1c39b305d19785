"""Parsers for exported Pokemon sets."""

from .smogon import export_set, export_team, parse_set, parse_team

__all__ = ["export_set", "export_team", "parse_set", "parse_team"]
