"""Bundled data files for amu."""
