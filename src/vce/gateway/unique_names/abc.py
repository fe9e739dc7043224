"""Unique ephemeral name generation abstraction.

Temporary directories and transient files need names that do not collide
with other vce processes. This ABC lets tests substitute predictable names.
"""

from abc import ABC, abstractmethod


class UniqueNames(ABC):
    """Abstract source of process-unique names for ephemeral paths."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new name that is unique across processes.

        Returns:
            A string safe to embed in a file or directory name
        """
        ...
