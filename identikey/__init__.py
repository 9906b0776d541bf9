"""IdentiKey: user identity and session-token store backed by Redis."""

__version__ = "1.0.0"
