"""Packaged data files for SCFS."""
