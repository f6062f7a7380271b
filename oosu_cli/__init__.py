"""
oosu-cli: stages O&O ShutUp10 and a settings file, then applies them.
"""

__version__ = "1.0.0"
