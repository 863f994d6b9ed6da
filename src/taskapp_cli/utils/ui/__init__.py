"""Terminal rendering helpers built on Rich."""
