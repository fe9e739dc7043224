"""Fake UniqueNames implementation for testing.

FakeUniqueNames hands out a deterministic sequence of names so tests can
assert on the exact ephemeral paths that were used.
"""

from vce.gateway.unique_names.abc import UniqueNames


class FakeUniqueNames(UniqueNames):
    """Deterministic name generator.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, *, prefix: str = "unique") -> None:
        """Create FakeUniqueNames.

        Args:
            prefix: Prefix for generated names; names are "<prefix>-1", "<prefix>-2", ...
        """
        self._prefix = prefix
        self._generated: list[str] = []

    @property
    def generated(self) -> list[str]:
        """Get the names handed out so far.

        This property is for test assertions only.
        """
        return list(self._generated)

    def generate(self) -> str:
        name = f"{self._prefix}-{len(self._generated) + 1}"
        self._generated.append(name)
        return name
