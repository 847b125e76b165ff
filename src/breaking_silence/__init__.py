"""Breaking Silence: hand gesture and sign recognition from a live camera."""

__version__ = "0.1.0"
