"""A loaded document: its instances and the names of their types."""

from __future__ import annotations

import os
from typing import Union

from .binary import load_binary
from .model import Instance


class LoadError(Exception):
    """Raised when a document file cannot be loaded."""


class Document:
    """Instances and type names read from a binary place or model file."""

    def __init__(self) -> None:
        self._instances: list[Instance] = []
        self._types: list[str] = []

    @property
    def instances(self) -> tuple[Instance, ...]:
        """All instances, indexed by id."""
        return tuple(self._instances)

    @property
    def types(self) -> tuple[str, ...]:
        """Type names, indexed by type index."""
        return tuple(self._types)

    def load_file(self, file_name: Union[str, "os.PathLike[str]"]) -> None:
        """Load a binary document, replacing the current contents.

        XML documents (names ending in ``x``) are not supported.
        Raises LoadError on any failure.
        """
        if file_name is None:
            raise LoadError("No file name given")
        name = os.fspath(file_name)
        if not name:
            raise LoadError("No file name given")
        if name[-1] in "xX":
            raise LoadError("XML documents are not supported")
        try:
            loaded = load_binary(name)
        except Exception as exc:
            raise LoadError(f"Cannot load {name!r}: {exc}") from exc
        self._instances = loaded.instances
        self._types = loaded.type_names

    def type_name(self, instance: Instance) -> str:
        """Return the type name of an instance of this document, or ``""``."""
        if not 0 <= instance.id < len(self._instances):
            return ""
        if self._instances[instance.id] is not instance:
            return ""
        index = instance.type_index
        if index is None or not 0 <= index < len(self._types):
            return ""
        return self._types[index]