"""boltctl — project resolution and validation for the Bolt automation tool."""

__version__ = "0.1.0"
