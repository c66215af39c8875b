from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

from .errors import SetupError

if TYPE_CHECKING:
    from .context import SetupContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single setup stage."""

    step_id: str
    abort_on_failure: bool

    def run(self, ctx: "SetupContext") -> None:
        ...


@dataclass(frozen=True)
class StageResult:
    step_id: str
    ok: bool
    error: Optional[BaseException] = None
    exit_code: int = 0


@dataclass
class PipelineResult:
    results: List[StageResult] = field(default_factory=list)
    failed: Optional[StageResult] = None

    @property
    def ok(self) -> bool:
        return self.failed is None

    @property
    def exit_code(self) -> int:
        return 0 if self.failed is None else self.failed.exit_code

    @property
    def ran_steps(self) -> List[str]:
        return [r.step_id for r in self.results]

    @property
    def tolerated(self) -> List[StageResult]:
        return [r for r in self.results if not r.ok and r is not self.failed]


def _run_stage(step: Step, ctx: "SetupContext") -> StageResult:
    try:
        step.run(ctx)
    except SetupError as e:
        return StageResult(step_id=step.step_id, ok=False, error=e, exit_code=e.exit_code)
    except OSError as e:
        return StageResult(step_id=step.step_id, ok=False, error=e, exit_code=1)
    return StageResult(step_id=step.step_id, ok=True)


def run_pipeline(*, ctx: "SetupContext", steps: Sequence[Step]) -> PipelineResult:
    """Run stages in order, stopping at the first failed stage that aborts on failure."""

    result = PipelineResult()

    for step in steps:
        logger.info("Running step %s", step.step_id)
        stage = _run_stage(step, ctx)
        result.results.append(stage)

        if stage.ok:
            continue

        if step.abort_on_failure:
            logger.error("Step %s failed: %s", step.step_id, stage.error)
            result.failed = stage
            break

        logger.warning("Ignoring failure of step %s: %s", step.step_id, stage.error)

    return result
