"""
connectfour - Two-player Connect Four game engine

Tracks the board, validates drops, detects four-in-a-row and ties, and
reports each move to a presentation layer.
"""

__version__ = '0.1.0'
