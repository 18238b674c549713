"""vmctl — project-scoped virtual machine environment CLI."""

__version__ = "0.1.0"
