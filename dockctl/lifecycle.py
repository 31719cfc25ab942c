"""Container lifecycle commands."""

from dockctl import logger
from dockctl.errors import InvalidRequestError
from dockctl.runtime import RuntimeClient
from dockctl.schemas import KillRequest

TERMINATE_SIGNAL = "SIGTERM"


class KillIssuer:
    """
    Sends one graceful-terminate request per call.

    Runtime errors propagate unchanged. A successful return means the daemon
    accepted the signal, not that the container has stopped.
    """

    def __init__(self, runtime: RuntimeClient):
        self.runtime = runtime

    def issue(self, name: str) -> KillRequest:
        if not name or not name.strip():
            raise InvalidRequestError("A container name is required to kill a container.")

        request = KillRequest(name=name, signal=TERMINATE_SIGNAL)
        logger.debug(f"Issuing kill request: {request}")
        self.runtime.kill_container(request)
        return request
