from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from diamond_gateway.types import JsonDict


@dataclass(slots=True, frozen=True)
class MetadataContent:
    name: str
    description: str = ""
    image: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> JsonDict:
        return {
            **dict(self.extra),
            "name": self.name,
            "description": self.description,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MetadataContent:
        extra = {key: value for key, value in payload.items() if key not in {"name", "description", "image"}}
        return cls(
            name=str(payload.get("name", "")),
            description=str(payload.get("description", "")),
            image=str(payload.get("image", "")),
            extra=extra,
        )


def as_record(content: MetadataContent | Mapping[str, Any]) -> JsonDict:
    if isinstance(content, MetadataContent):
        return content.as_dict()
    return dict(content)
