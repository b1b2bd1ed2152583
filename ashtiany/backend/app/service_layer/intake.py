# app/service_layer/intake.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Sequence

import httpx

from ..config import IntakeConfig
from ..domain.errors import ConfigMissing, UpstreamFailure
from ..domain.normalize import normalize_lead
from ..domain.policies import is_recognized_form, spam_gate
from ..domain.scoring import compute_score, explain_score
from ..domain.types import (
    EffectOutcome,
    EffectStatus,
    IntakeResult,
    IntakeStatus,
    RawSubmission,
    ScoredLead,
)
from ..integrations.base import Effect, EffectPolicy
from ..integrations.effects import build_effects

log = logging.getLogger(__name__)

# Messages returned to the form platform. Rejections reuse the success text on purpose.
MSG_IGNORED = "Ignored other form"
MSG_RECEIVED = "Received"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IntakePipeline:
    """
    One run per submission, no state kept between runs:

      form filter -> spam gates -> normalize -> score -> fan-out

    Fan-out effects run concurrently and are isolated from each other.
    Only a mandatory effect that does not succeed fails the run.
    """

    def __init__(
        self,
        config: IntakeConfig,
        effects: Sequence[Effect],
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config
        self.effects = list(effects)
        self.clock = clock

    @classmethod
    def from_config(
        cls,
        config: IntakeConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "IntakePipeline":
        return cls(config=config, effects=build_effects(config, transport))

    async def run(self, raw: RawSubmission) -> IntakeResult:
        policy = self.config.spam

        if not is_recognized_form(raw, policy.form_name):
            log.info("intake.ignored form_name=%r", raw.form_name)
            return IntakeResult(status=IntakeStatus.ignored, message=MSG_IGNORED)

        blocked, reason, detail = spam_gate(raw, policy)
        if blocked:
            log.info("intake.rejected reason=%s detail=%s", reason.value, detail or "-")
            return IntakeResult(status=IntakeStatus.rejected, message=MSG_RECEIVED, reason=reason.value)

        lead = normalize_lead(raw)
        score = compute_score(lead)
        scored = ScoredLead(lead=lead, score=score, submitted_at=self.clock())
        log.info(
            "intake.accepted score=%d explain=%s email_domain=%s",
            score,
            explain_score(lead),
            lead.email_domain,
        )

        outcomes = await asyncio.gather(*(self._run_effect(e, scored) for e in self.effects))

        failed_mandatory = [
            o
            for e, o in zip(self.effects, outcomes)
            if e.policy == EffectPolicy.mandatory and o.status != EffectStatus.success
        ]
        if failed_mandatory:
            first = failed_mandatory[0]
            return IntakeResult(
                status=IntakeStatus.failed,
                message=f"{first.effect}: {first.detail or first.status.value}",
                score=score,
                outcomes=tuple(outcomes),
            )

        return IntakeResult(
            status=IntakeStatus.processed,
            message=MSG_RECEIVED,
            score=score,
            outcomes=tuple(outcomes),
        )

    async def _run_effect(self, effect: Effect, scored: ScoredLead) -> EffectOutcome:
        mandatory = effect.policy == EffectPolicy.mandatory
        level = logging.ERROR if mandatory else logging.WARNING

        try:
            outcome = await effect.execute(scored)
        except ConfigMissing as e:
            # Unconfigured optional effects are a normal deployment state.
            log.log(
                logging.ERROR if mandatory else logging.INFO,
                "effect.not_configured effect=%s missing=%s",
                effect.name,
                ",".join(e.missing),
            )
            return EffectOutcome.skipped(effect.name, "not configured: " + ",".join(e.missing))
        except UpstreamFailure as e:
            log.log(level, "effect.failed effect=%s service=%s status=%s", effect.name, e.service, e.status_code)
            return EffectOutcome.failed(effect.name, str(e))
        except httpx.HTTPError as e:
            log.log(level, "effect.failed effect=%s error=%s", effect.name, type(e).__name__)
            return EffectOutcome.failed(effect.name, f"{type(e).__name__}: {e}")
        except Exception as e:
            # Don't let one effect take down its siblings.
            log.exception("effect.crashed effect=%s", effect.name)
            return EffectOutcome.failed(effect.name, f"{type(e).__name__}: {e}")

        log.info("effect.%s effect=%s detail=%s", outcome.status.value, effect.name, outcome.detail or "-")
        return outcome
