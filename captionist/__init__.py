"""Captionist: social-media caption and hook generation service."""

__version__ = "0.1.0"
