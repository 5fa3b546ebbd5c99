"""Self-signed default TLS certificate generator."""

__version__ = "0.1.0"
