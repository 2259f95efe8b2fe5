"""TuneVote - anonymous track voting for a live radio stream."""

__version__ = "1.0.0"
