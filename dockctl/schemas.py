from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import ClassVar, List, Optional, Tuple


class RuntimeRecord(BaseModel):
    """Base for records read out of Docker API responses (PascalCase keys)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class ImageRecord(RuntimeRecord):
    """Schema for an entry of the image listing."""
    id: str = Field(alias="Id")
    size: int = Field(default=0, alias="Size")
    repo_tags: List[str] = Field(default_factory=list, alias="RepoTags")

    @field_validator("size", mode="before")
    @classmethod
    def _size_none_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("repo_tags", mode="before")
    @classmethod
    def _tags_none_is_empty(cls, value):
        # Untagged images come back with RepoTags null on older daemons
        return [] if value is None else value


class ContainerRecord(RuntimeRecord):
    """Schema for an entry of the container listing. Every field may be absent."""
    id: Optional[str] = Field(default=None, alias="Id")
    names: Optional[List[str]] = Field(default=None, alias="Names")
    image: Optional[str] = Field(default=None, alias="Image")
    state: Optional[str] = Field(default=None, alias="State")


class ContainerState(RuntimeRecord):
    status: Optional[str] = Field(default=None, alias="Status")


class ContainerInspectRecord(RuntimeRecord):
    """Schema for detailed container inspection."""
    id: Optional[str] = Field(default=None, alias="Id")
    name: Optional[str] = Field(default=None, alias="Name")
    image: Optional[str] = Field(default=None, alias="Image")
    size_root_fs: Optional[int] = Field(default=None, alias="SizeRootFs")
    state: Optional[ContainerState] = Field(default=None, alias="State")


class DisplayRow(BaseModel):
    """A fixed-shape table row; every cell is a display string."""
    model_config = ConfigDict(frozen=True)

    HEADERS: ClassVar[Tuple[str, ...]] = ()

    def as_tuple(self) -> Tuple[str, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)


class ImageDisplayRow(DisplayRow):
    HEADERS = ("ID", "Image Tag", "Size(KB)")

    short_id: str
    tag: str
    size_kb: str


class ContainerDisplayRow(DisplayRow):
    HEADERS = ("ID", "Container Name", "Image", "State")

    short_id: str
    name: str
    image: str
    state: str


class ContainerDetailRow(DisplayRow):
    HEADERS = ("ID", "Container Name", "Image ID", "Container Size", "State")

    id: str
    name: str
    image: str
    size_root_fs: str
    status: str


class KillRequest(BaseModel):
    """A termination request for one container, consumed by a single call."""
    model_config = ConfigDict(frozen=True)

    name: str
    signal: str = "SIGTERM"


class KillOutcome(BaseModel):
    """What the runtime answered to a KillRequest."""
    name: str
    signal: str
    acknowledged: bool
    reason: Optional[str] = None
