"""Dense, low-rank and block matrix types with randomized compression, timing and reporting."""

__version__ = "0.1.0"