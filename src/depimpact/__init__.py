"""depimpact - change-impact analysis over module dependency graphs."""

__version__ = "0.1.0"
