from __future__ import annotations

from enum import Enum
from typing import Protocol

from ..domain.types import EffectOutcome, ScoredLead


class EffectPolicy(str, Enum):
    # A mandatory effect that does not succeed fails the whole invocation.
    mandatory = "mandatory"
    best_effort = "best_effort"


class Effect(Protocol):
    name: str
    policy: EffectPolicy

    async def execute(self, scored: ScoredLead) -> EffectOutcome:
        """
        Perform the side effect once.
        Raise ConfigMissing when unconfigured and UpstreamFailure on non-2xx;
        return a skipped outcome for deliberate, non-error skips.
        """
        ...
