"""cleanctl - Profile-driven cleanup of files left behind by other applications."""

__version__ = "0.1.0"
