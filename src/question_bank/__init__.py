"""Generate multiple-choice question banks from PDF course material."""

__version__ = "0.1.0"
