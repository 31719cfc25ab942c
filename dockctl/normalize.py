"""
Turns raw runtime records into fixed-shape display rows.

Images are held to the inventory contract: an id without the content-hash
prefix or an image without any tag is a MalformedRecordError. Container
listings are routinely sparse (unnamed or half-created containers), so
missing container fields fall back to placeholders instead.
"""

from typing import Iterable, List

from dockctl.errors import MalformedRecordError
from dockctl.schemas import (
    ContainerDetailRow,
    ContainerDisplayRow,
    ContainerInspectRecord,
    ContainerRecord,
    ImageDisplayRow,
    ImageRecord,
)

ID_PREFIX = "sha256:"
SHORT_ID_LENGTH = 12
NO_NAME = "n/a"
NO_SIZE = "-"


def normalize_image(raw: ImageRecord) -> ImageDisplayRow:
    """
    Builds the (short id, primary tag, size KB) row for an image.

    Raises:
        MalformedRecordError: If the id lacks the "sha256:" prefix or the image has no tags.
    """
    if not raw.id.startswith(ID_PREFIX):
        raise MalformedRecordError(raw.id, "Id", f"does not start with '{ID_PREFIX}'")
    if not raw.repo_tags:
        raise MalformedRecordError(raw.id, "RepoTags", "is empty")

    short_id = raw.id[len(ID_PREFIX):][:SHORT_ID_LENGTH]
    return ImageDisplayRow(
        short_id=short_id,
        tag=raw.repo_tags[0],
        size_kb=str(raw.size // 1024),
    )


def normalize_container(raw: ContainerRecord) -> ContainerDisplayRow:
    """Builds the (short id, name, image, state) row for a container. Never fails."""
    short_id = (raw.id or "")[:SHORT_ID_LENGTH]

    if raw.names:
        # Only the leading slash of the joined string goes: ["/a", "/b"] -> "a, /b"
        joined = ", ".join(raw.names)
        name = joined[1:] if joined.startswith("/") else joined
    else:
        name = NO_NAME

    return ContainerDisplayRow(
        short_id=short_id,
        name=name,
        image=raw.image or "",
        state=raw.state or "",
    )


def normalize_inspect(raw: ContainerInspectRecord) -> ContainerDetailRow:
    """
    Builds the detail row for an inspected container.

    Raises:
        MalformedRecordError: If the state object or its status is missing.
    """
    if raw.state is None or not raw.state.status:
        raise MalformedRecordError(raw.id, "State.Status", "is missing")

    size = NO_SIZE if raw.size_root_fs is None else str(raw.size_root_fs)
    return ContainerDetailRow(
        id=raw.id or "",
        name=raw.name or "",
        image=raw.image or "",
        size_root_fs=size,
        status=raw.state.status,
    )


def normalize_images(records: Iterable[ImageRecord]) -> List[ImageDisplayRow]:
    """Normalizes a whole listing; the first malformed image aborts it."""
    return [normalize_image(record) for record in records]


def normalize_containers(records: Iterable[ContainerRecord]) -> List[ContainerDisplayRow]:
    return [normalize_container(record) for record in records]
