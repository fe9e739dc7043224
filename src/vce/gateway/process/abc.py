"""Delegate process execution abstraction.

This module provides an ABC for running the artifacts delegate to
completion, enabling tests that never spawn node.
"""

from abc import ABC, abstractmethod

from vce.artifacts.models import DelegateInvocation


class ProcessRunner(ABC):
    """Abstract process runner for dependency injection."""

    @abstractmethod
    def run(self, invocation: DelegateInvocation) -> int:
        """Run the invocation and block until the process exits.

        Standard streams are inherited from the current process.

        Args:
            invocation: Executable, arguments and working directory to use

        Returns:
            The raw exit status reported by the platform (may be negative
            when the process was killed by a signal)

        Raises:
            DelegateLaunchError: If the process could not be started
        """
        ...
