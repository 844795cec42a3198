# scope_intake/__init__.py
"""Conversation intelligence and scope document synthesis for website project intake."""

__version__ = "0.1.0"
