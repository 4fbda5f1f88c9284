"""WordTrail: daily writing statistics for markdown notes."""

__version__ = "0.1.0"
