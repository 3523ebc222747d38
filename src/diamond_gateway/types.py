from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Any

JsonDict = dict[str, Any]


class CommandStatus(StrEnum):
    OK = "ok"
    FAILED = "failed"


class FacetKind(StrEnum):
    BRAND = "brand"
    MEMBERSHIP_GOVERNANCE = "membership-governance"
    MEMBERSHIP_TOKEN = "membership-token"
    GOVERNANCE = "governance"
    OWNERSHIP = "ownership"
    DIAMOND_CUT = "diamond-cut"
    DIAMOND_LOUPE = "diamond-loupe"


class VoteSupport(IntEnum):
    AGAINST = 0
    FOR = 1
    ABSTAIN = 2


@dataclass(slots=True, frozen=True)
class CommandResult:
    command: str
    status: CommandStatus
    details: JsonDict = field(default_factory=dict)

    def to_dict(self) -> JsonDict:
        return {
            "command": self.command,
            "status": self.status.value,
            "details": self.details,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"), default=str)
