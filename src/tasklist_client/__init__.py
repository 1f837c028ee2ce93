"""Client-side state layer for a remote task list (validation, HTTP, repository, reducer, store)."""

__version__ = "0.1.0"
