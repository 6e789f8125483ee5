"""
Rumble Flavour Matcher

Upload a stomach rumble, get a crisp flavour. Loudness and a
zero-crossing pitch estimate place the clip on a 2-D grid and the
nearest of five flavour zones wins.
"""

__version__ = "1.0.0"
