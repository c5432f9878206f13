from __future__ import annotations

"""
Domain Exception Hierarchy.

Source acquisition failures are kept distinct from parsing failures so that
interfaces can report them without ever emitting a partial tree.
"""

from typing import List


class Tree2JsonError(Exception):
    """Base class for all application errors."""


class SourceError(Tree2JsonError):
    """The decorated text could not be obtained."""


class SourceReadError(SourceError):
    """A local source file is missing or unreadable."""


class SourceFetchError(SourceError):
    """A remote source could not be downloaded."""


class SourceDecodeError(SourceError):
    """Source bytes cannot be decoded with the requested encoding."""


class DuplicateEntryError(Tree2JsonError):
    """A sibling name occurs twice under the same parent."""

    def __init__(self, name: str, parents: List[str]):
        self.name = name
        self.parents = list(parents)
        location = "/".join(self.parents) or "<root>"
        super().__init__(f"Duplicate entry '{name}' under '{location}'.")


class OutputExistsError(Tree2JsonError):
    """The output file already exists and overwriting was not allowed."""
