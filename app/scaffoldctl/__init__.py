"""scaffoldctl - Conflict-safe scaffold replication for repositories."""

__version__ = "0.1.0"
