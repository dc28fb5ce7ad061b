"""Data layer: definition files and persistence adapters."""
