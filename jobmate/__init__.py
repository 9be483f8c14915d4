"""Jobmate: compatibility scoring, geo-aware matching and auto-replies."""

__version__ = "0.1.0"
