"""
pocket_arcade: Flappy Square and Gomoku game engines with a pygame shell.
"""

__version__ = "1.0.0"
