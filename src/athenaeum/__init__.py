"""Library management back end: catalogue, readers and lending policy."""

__version__ = "1.0.0"
