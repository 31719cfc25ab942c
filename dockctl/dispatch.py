"""
Command dispatch: one typed request in, one runtime round trip, one report out.

Rows are always built in full before anything is printed, so a failing
listing never leaves a partial table on the terminal.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from rich.markup import escape

from dockctl import logger
from dockctl.errors import RuntimeRequestError
from dockctl.lifecycle import TERMINATE_SIGNAL, KillIssuer
from dockctl.normalize import normalize_containers, normalize_images, normalize_inspect
from dockctl.queries import images_query, running_containers_query
from dockctl.render import TableRenderer
from dockctl.runtime import RuntimeClient
from dockctl.schemas import (
    ContainerDetailRow,
    ContainerDisplayRow,
    DisplayRow,
    ImageDisplayRow,
    KillOutcome,
)

RUNNING_FOOTER = "All Running Docker Containers Info"


@dataclass(frozen=True)
class ListImages:
    pass


@dataclass(frozen=True)
class ListRunningContainers:
    pass


@dataclass(frozen=True)
class KillContainer:
    name: str


@dataclass(frozen=True)
class InspectContainer:
    name: str


Request = Union[ListImages, ListRunningContainers, KillContainer, InspectContainer]


class Dispatcher:
    """Runs dockctl requests against a connected RuntimeClient."""

    def __init__(self, runtime: RuntimeClient, renderer: Optional[TableRenderer] = None):
        self.runtime = runtime
        self.renderer = renderer or TableRenderer()
        self.kill_issuer = KillIssuer(runtime)

    def dispatch(self, request: Request):
        """
        Executes `request` and prints its report.

        Returns:
            The rendered rows for listings and inspection, a KillOutcome for kills.

        Raises:
            DockctlError: For connection, request and malformed-record failures.
            TypeError: If `request` is not one of the known request types.
        """
        logger.info(f"Dispatching {request!r}")
        if isinstance(request, ListImages):
            return self.list_images()
        if isinstance(request, ListRunningContainers):
            return self.list_running_containers()
        if isinstance(request, KillContainer):
            return self.kill_container(request.name)
        if isinstance(request, InspectContainer):
            return self.inspect_container(request.name)
        raise TypeError(f"Unsupported request: {request!r}")

    def list_images(self) -> List[ImageDisplayRow]:
        records = self.runtime.list_images(images_query())
        rows = normalize_images(records)
        self._render(ImageDisplayRow.HEADERS, rows)
        return rows

    def list_running_containers(self) -> List[ContainerDisplayRow]:
        records = self.runtime.list_containers(running_containers_query())
        rows = normalize_containers(records)
        self._render(ContainerDisplayRow.HEADERS, rows)
        self.renderer.print(RUNNING_FOOTER)
        return rows

    def kill_container(self, name: str) -> KillOutcome:
        try:
            request = self.kill_issuer.issue(name)
        except RuntimeRequestError as e:
            # The name is echoed either way; the outcome tells the caller it was rejected.
            self.renderer.print(f"[yellow]Kill not acknowledged for container {escape(_quoted(name))}: {escape(str(e))}[/yellow]")
            return KillOutcome(name=name, signal=TERMINATE_SIGNAL, acknowledged=False, reason=str(e))

        self.renderer.print(f"Kills Container ID: {escape(_quoted(name))}")
        return KillOutcome(name=request.name, signal=request.signal, acknowledged=True)

    def inspect_container(self, name: str) -> List[ContainerDetailRow]:
        record = self.runtime.inspect_container(name)
        rows = [normalize_inspect(record)]
        self._render(ContainerDetailRow.HEADERS, rows)
        return rows

    def _render(self, headers, rows: List[DisplayRow]) -> None:
        logger.debug(f"Rendering {len(rows)} rows")
        self.renderer.render(headers, rows)


def _quoted(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
