"""Schema constraint checks and JSON/YAML decoders: bounds, validators and decoding."""

__version__ = "0.1.0"
__all__ = ["bounds", "validators", "decoding"]