"""Criticality scoring of projects from numeric signals, with supporting utilities."""

__version__ = "0.1.0"