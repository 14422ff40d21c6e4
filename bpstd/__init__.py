"""PSBT key types, raw key-value maps, versions and nSequence/RBF helpers."""

__version__ = "0.12.0"

__all__ = ["version", "rbf", "keys", "input_keys", "maps", "keymap"]