"""Muzak - an interactive command shell for local music playback."""

__version__ = "0.1.0"
