"""amu - merge multiple source directories into one target with symlinks."""

__version__ = "0.1.0"
