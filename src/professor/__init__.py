"""Productive Professor: classroom chat service over a hosted LLM."""

__version__ = "0.1.0"
