"""Option and filter payloads for the inventory listings."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class ImageQuery:
    """Options for the image listing. all=True includes dangling/untagged layers."""
    all: bool = True

    def as_kwargs(self) -> Dict[str, Any]:
        return {"all": self.all}


@dataclass(frozen=True)
class ContainerQuery:
    """
    Options for the container listing.

    `filters` maps a filter key to the accepted values, e.g. {"status": ["running"]}.
    all=True together with a status filter means "every container matching the
    filter", which is how the Docker API reads it.
    """
    all: bool = True
    filters: Dict[str, List[str]] = field(default_factory=dict)

    def with_filter(self, key: str, *values: str) -> "ContainerQuery":
        """Returns a copy with `values` added to the accepted set for `key`."""
        filters = {k: list(v) for k, v in self.filters.items()}
        accepted = filters.setdefault(key, [])
        for value in values:
            if value not in accepted:
                accepted.append(value)
        return ContainerQuery(all=self.all, filters=filters)

    def as_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"all": self.all}
        if self.filters:
            kwargs["filters"] = {k: list(v) for k, v in self.filters.items()}
        return kwargs


def images_query() -> ImageQuery:
    return ImageQuery(all=True)


def running_containers_query() -> ContainerQuery:
    return ContainerQuery(all=True).with_filter("status", "running")
