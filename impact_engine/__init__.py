"""Effect & impact valuation engine for the project-sharing portal."""

__version__ = "0.1.0"
