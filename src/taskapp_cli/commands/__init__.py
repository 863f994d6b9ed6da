"""Command groups and commands for the taskapp CLI."""
