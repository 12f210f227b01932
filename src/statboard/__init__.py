"""Statboard — collect daily metrics from fitness APIs for a dashboard."""

__version__ = "0.1.0"
