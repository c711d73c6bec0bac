"""AI quiz generation, answer keys and grading."""

__version__ = "0.1.0"
