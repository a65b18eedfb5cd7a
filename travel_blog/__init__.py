"""Travel blog API: per-user article likes, like counters and comments."""

__version__ = "1.0.0"
