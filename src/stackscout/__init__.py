"""stackscout — dev-time discovery tools for AI coding assistants."""

__version__ = "0.3.0"
