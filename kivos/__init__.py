"""An in-memory file system, character pipes, streams and command programs of a small simulated operating system."""

__version__ = "0.1.0"