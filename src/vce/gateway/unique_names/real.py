"""Real UniqueNames implementation backed by random UUIDs."""

import uuid

from vce.gateway.unique_names.abc import UniqueNames


class RealUniqueNames(UniqueNames):
    """Production implementation using uuid4()."""

    def generate(self) -> str:
        return str(uuid.uuid4())
