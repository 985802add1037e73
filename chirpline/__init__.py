"""A small microblogging HTTP API with follows and home timelines."""

__version__ = "1.0.0"