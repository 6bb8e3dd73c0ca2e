"""Build FBX 7.4+ data trees in memory and write binary FBX."""

__version__ = "0.1.0"