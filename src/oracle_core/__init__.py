"""Market oracle: lunar and geomagnetic signals, archetype classification, templated posts."""

__version__ = "0.1.0"
