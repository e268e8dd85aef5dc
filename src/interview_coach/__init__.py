"""Spoken interview practice with AI-generated questions and feedback."""

__version__ = "0.1.0"
