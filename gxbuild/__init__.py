"""Containerized build and release packaging for VisualBoyAdvanceGX."""

__version__ = "0.1.0"
