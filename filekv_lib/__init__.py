"""filekv: hierarchical key-value storage on a plain filesystem."""

__version__ = "0.1.0"
