"""runofshow - run-of-show planning for live sports broadcasts."""

__version__ = "0.1.0"
