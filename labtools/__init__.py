"""Small Unix-style text tools, a shell command-line parser and socket exercises."""

__version__ = "0.1.0"