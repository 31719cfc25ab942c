from typing import Any, List, Optional, Type, TypeVar

import docker
import docker.errors
import requests.exceptions
from pydantic import ValidationError

from dockctl import logger
from dockctl.config import Settings
from dockctl.errors import (
    ContainerNotFoundError,
    MalformedRecordError,
    RuntimeConnectionError,
    RuntimeRequestError,
)
from dockctl.queries import ContainerQuery, ImageQuery
from dockctl.schemas import ContainerInspectRecord, ContainerRecord, ImageRecord, KillRequest, RuntimeRecord

RecordT = TypeVar("RecordT", bound=RuntimeRecord)


def parse_record(model: Type[RecordT], raw: Any) -> RecordT:
    """
    Validates one raw API record against `model`.

    Raises:
        MalformedRecordError: If a field is missing or has the wrong type.
    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "record"
        record_id = raw.get("Id") if isinstance(raw, dict) else None
        logger.error(f"Docker returned a malformed {model.__name__}: {e}")
        raise MalformedRecordError(record_id, field, f"is invalid ({error['msg']})") from e


class RuntimeClient:
    """Thin wrapper over the Docker low-level API used by the dockctl commands."""

    def __init__(self, settings: Optional[Settings] = None, api: Optional[docker.APIClient] = None):
        """
        Args:
            settings: Endpoint and timeout. Defaults to Settings().
            api: An already-built docker.APIClient. When given, connect() only pings it.
        """
        self.settings = settings or Settings()
        self.api = api

    def connect(self) -> "RuntimeClient":
        """
        Opens the connection to the daemon and checks it answers.

        Raises:
            RuntimeConnectionError: If the daemon cannot be reached.
        """
        try:
            if self.api is None:
                self.api = docker.APIClient(base_url=self.settings.base_url, timeout=self.settings.timeout)
            self.api.ping()
        except (docker.errors.DockerException, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to connect to Docker at {self.settings.base_url}: {e}")
            raise RuntimeConnectionError(
                f"Cannot connect to the Docker daemon at {self.settings.base_url}: {e}"
            ) from e
        logger.info(f"Connected to Docker daemon at {self.settings.base_url}")
        return self

    def close(self) -> None:
        if self.api is not None:
            self.api.close()

    def __enter__(self) -> "RuntimeClient":
        return self.connect()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_api(self) -> docker.APIClient:
        if self.api is None:
            raise RuntimeConnectionError("RuntimeClient is not connected; call connect() first.")
        return self.api

    def list_images(self, query: ImageQuery) -> List[ImageRecord]:
        """
        Lists images.

        Raises:
            RuntimeRequestError: If the daemon rejects the call or the transport fails.
            MalformedRecordError: If a returned record does not match the schema.
        """
        kwargs = query.as_kwargs()
        logger.info(f"Listing images with options: {kwargs}")
        try:
            raw_images = self._require_api().images(**kwargs)
        except (docker.errors.APIError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to list images: {e}")
            raise RuntimeRequestError(f"Failed to list images: {e}") from e

        images = [parse_record(ImageRecord, item) for item in raw_images]
        logger.info(f"Found {len(images)} images.")
        return images

    def list_containers(self, query: ContainerQuery) -> List[ContainerRecord]:
        """
        Lists containers matching `query`.

        Raises:
            RuntimeRequestError: If the daemon rejects the call or the transport fails.
            MalformedRecordError: If a returned record does not match the schema.
        """
        kwargs = query.as_kwargs()
        logger.info(f"Listing containers with options: {kwargs}")
        try:
            raw_containers = self._require_api().containers(**kwargs)
        except (docker.errors.APIError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to list containers: {e}")
            raise RuntimeRequestError(f"Failed to list containers: {e}") from e

        containers = [parse_record(ContainerRecord, item) for item in raw_containers]
        logger.info(f"Found {len(containers)} containers.")
        for i, c in enumerate(containers):
            logger.debug(f"  {i+1}. ID: {c.id}, Names: {c.names}, Image: {c.image}, State: {c.state}")
        return containers

    def kill_container(self, request: KillRequest) -> None:
        """
        Sends `request.signal` to the named container.

        Raises:
            ContainerNotFoundError: If no container has that name.
            RuntimeRequestError: For other rejections (e.g. the container is not running).
        """
        logger.info(f"Sending {request.signal} to container {request.name}")
        try:
            self._require_api().kill(request.name, signal=request.signal)
        except docker.errors.NotFound as e:
            logger.warning(f"Container {request.name} not found when trying to kill it.")
            raise ContainerNotFoundError(request.name, e.explanation) from e
        except (docker.errors.APIError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to kill container {request.name}: {e}")
            raise RuntimeRequestError(f"Failed to kill container '{request.name}': {e}") from e
        logger.info(f"Docker accepted {request.signal} for container {request.name}")

    def inspect_container(self, name: str) -> ContainerInspectRecord:
        """
        Fetches the detail record of one container.

        Raises:
            ContainerNotFoundError: If no container has that name.
            RuntimeRequestError: If the call fails otherwise.
        """
        logger.info(f"Inspecting container {name}")
        try:
            raw = self._require_api().inspect_container(name)
        except docker.errors.NotFound as e:
            logger.warning(f"Container {name} not found when trying to inspect it.")
            raise ContainerNotFoundError(name, e.explanation) from e
        except (docker.errors.APIError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to inspect container {name}: {e}")
            raise RuntimeRequestError(f"Failed to inspect container '{name}': {e}") from e
        return parse_record(ContainerInspectRecord, raw)
