"""Reader-preference and writer-preference read/write locks for threads, with an ordering trial."""

__version__ = "0.1.0"
__all__ = ["locks", "trial"]