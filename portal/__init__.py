"""
Portal Module

Session flow, configuration and command-line interface.

This module provides:
- YAML-backed AppConfig
- MatchSession: login, validated submit, match listing with icebreakers
- Typer CLI (login, submit, matches, show, list, seed, reset, export)
"""

__version__ = "0.1.0"
