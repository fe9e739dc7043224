"""Real ProcessRunner implementation using subprocess."""

import logging
import subprocess

from vce.artifacts.errors import DelegateLaunchError
from vce.artifacts.models import DelegateInvocation
from vce.gateway.process.abc import ProcessRunner

logger = logging.getLogger(__name__)


class RealProcessRunner(ProcessRunner):
    """Production implementation using subprocess.run()."""

    def run(self, invocation: DelegateInvocation) -> int:
        cmd = invocation.command_line
        logger.debug("Running %s in %s", " ".join(cmd), invocation.working_directory)
        try:
            result = subprocess.run(cmd, cwd=invocation.working_directory, check=False)
        except OSError as e:
            raise DelegateLaunchError(
                f"Failed to start {invocation.executable}: {e}\nCommand: {' '.join(cmd)}"
            ) from e
        logger.debug("%s exited with %d", invocation.executable, result.returncode)
        return result.returncode
