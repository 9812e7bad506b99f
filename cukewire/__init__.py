"""Cucumber step definitions, tagged hooks, data tables and a JSON wire protocol server."""

__version__ = "0.1.0"