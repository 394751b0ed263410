"""BetPool: group bet proposals settled by majority vote."""

__version__ = "0.1.0"
__author__ = "BetPool Team"

__all__ = ["__version__", "__author__"]
