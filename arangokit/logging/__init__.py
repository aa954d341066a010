"""Structured logging setup for applications embedding arangokit."""

from .logging import LogManager

__all__ = ["LogManager"]
