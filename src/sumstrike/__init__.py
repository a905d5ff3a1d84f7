"""SumStrike: a falling-block arithmetic puzzle engine."""

__version__ = "0.1.0"
