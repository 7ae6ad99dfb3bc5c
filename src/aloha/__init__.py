"""Aloha Nails AI Photoshoot - creative brief composer and render gateway."""

__version__ = "0.1.0"
