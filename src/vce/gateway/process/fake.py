"""Fake ProcessRunner implementation for testing.

FakeProcessRunner records invocations and returns a configured exit code.
It can also play the delegate's part by writing the telemetry file.
"""

from vce.artifacts.errors import DelegateLaunchError
from vce.artifacts.models import DelegateInvocation
from vce.gateway.process.abc import ProcessRunner


class FakeProcessRunner(ProcessRunner):
    """In-memory fake implementation that tracks invocations.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        exit_code: int = 0,
        telemetry_content: str | None = None,
        launch_error: str | None = None,
    ) -> None:
        """Create FakeProcessRunner.

        Args:
            exit_code: Raw exit status returned from every run
            telemetry_content: If set and the invocation carries a telemetry
                file, this text is written there before returning
            launch_error: If set, run raises DelegateLaunchError with this message
        """
        self._exit_code = exit_code
        self._telemetry_content = telemetry_content
        self._launch_error = launch_error
        self._invocations: list[DelegateInvocation] = []

    @property
    def invocations(self) -> list[DelegateInvocation]:
        """Get the list of invocations that were run.

        Returns a copy of the list to prevent external mutation.

        This property is for test assertions only.
        """
        return list(self._invocations)

    @property
    def last_invocation(self) -> DelegateInvocation | None:
        """Get the last invocation, or None if nothing was run.

        This property is for test assertions only.
        """
        if not self._invocations:
            return None
        return self._invocations[-1]

    def run(self, invocation: DelegateInvocation) -> int:
        if self._launch_error is not None:
            raise DelegateLaunchError(self._launch_error)
        self._invocations.append(invocation)
        if self._telemetry_content is not None and invocation.telemetry_file is not None:
            invocation.telemetry_file.parent.mkdir(parents=True, exist_ok=True)
            invocation.telemetry_file.write_text(self._telemetry_content, encoding="utf-8")
        return self._exit_code
