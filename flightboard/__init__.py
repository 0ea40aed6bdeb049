"""Real-time category leaderboards for flight simulator challenges."""

__version__ = "0.1.0"
