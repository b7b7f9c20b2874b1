"""Screen reader core: events, commands, accessibility cache, settings and key bindings."""

__version__ = "0.3.0"