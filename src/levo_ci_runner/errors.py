"""Shared error base for the runner domains."""


class LevoRunnerError(Exception):
    """Base class for failures that end one runner invocation."""
