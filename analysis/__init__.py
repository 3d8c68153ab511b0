"""Offline analysis of recorded lighthouse rounds."""
