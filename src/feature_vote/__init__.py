"""Feature Vote: feature requests ranked by one-per-user votes."""

__version__ = "0.1.0"
