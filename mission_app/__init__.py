"""Text-menu manager for users and the group missions they lead or join."""

__version__ = "0.1.0"
