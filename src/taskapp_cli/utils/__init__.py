"""Shared utilities: logging, exit codes, Typer helpers and terminal UI."""
