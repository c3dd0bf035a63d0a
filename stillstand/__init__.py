"""In-memory machine, failure and downtime database with a TCP server and a menu client."""

__version__ = "0.1.0"
__all__ = ["store", "protocol", "server", "client"]