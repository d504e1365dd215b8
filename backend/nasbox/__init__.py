"""NASBox — personal NAS file browser backend."""

__version__ = "0.1.0"
