"""Undercover / Mister White party game engine"""

__version__ = "0.1.0"
