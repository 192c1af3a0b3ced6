"""Terminal Notes - keyboard-driven personal notes in the terminal."""

__version__ = "0.3.0"
