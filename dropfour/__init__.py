"""
dropfour - Rules engine for gravity-drop four-in-a-line games

This package provides an N×N board with move application, turn management
and win/draw detection, plus a Gymnasium environment and a small CLI built
on top of it.
"""

__version__ = '0.1.0'
