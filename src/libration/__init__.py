"""Real-time animation of the Moon's libration on a Keplerian orbit."""

__version__ = "1.0.0"
