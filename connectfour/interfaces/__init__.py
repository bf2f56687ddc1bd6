"""
connectfour.interfaces - Front ends for the Connect Four engine

Currently the terminal front end used by run.py.
"""

__all__ = []
