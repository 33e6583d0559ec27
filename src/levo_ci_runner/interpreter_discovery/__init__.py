"""Interpreter discovery domain exports."""

from .interpreter_locator import (
    InterpreterNotFound,
    LocatedInterpreter,
    PythonVersion,
    interpreter_candidates,
    locate_interpreter,
    parse_python_version,
    query_python_version,
)

__all__ = [
    "InterpreterNotFound",
    "LocatedInterpreter",
    "PythonVersion",
    "interpreter_candidates",
    "locate_interpreter",
    "parse_python_version",
    "query_python_version",
]
