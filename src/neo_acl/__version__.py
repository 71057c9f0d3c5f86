"""Version information for neo-acl."""

__version__ = "0.4.11"
