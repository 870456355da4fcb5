from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional
import asyncio
import logging
import time

from studyguide.errors import DecodeFailure, InvocationFailure, TimeoutFailure, stage_failure
from studyguide.generation.schemas import CoreData, StageResult, StudyGuide
from studyguide.generation.stages import (
    ANALYSIS_STAGE,
    CONTENT_STAGE,
    CORE_STAGE,
    PRIORITY_STAGE,
    STRATEGY_STAGE,
    StageSpec,
)
from studyguide.models.llm_client import InferenceService, LLMConfig, call_llm
from studyguide.utils.json_parse import parse_json_or_throw

logger = logging.getLogger(__name__)

# Wall-clock budget for one whole generation
DEFAULT_TIMEOUT_S = 300.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# One stage = one model call + one decode
async def run_stage(
    stage: StageSpec,
    source: Any,
    cfg: LLMConfig,
    service: Optional[InferenceService] = None,
) -> StageResult:

    start = time.perf_counter()
    logger.info("Stage %s: started", stage.name)

    user_prompt = stage.project(source)
    raw = await call_llm(stage.system_prompt, user_prompt, cfg=cfg, service=service)
    result = stage.result_type.from_payload(parse_json_or_throw(raw))

    logger.info("Stage %s: done in %.1fs", stage.name, time.perf_counter() - start)
    return result


async def _run_required(stage, source, cfg, service) -> StageResult:
    try:
        return await run_stage(stage, source, cfg, service)
    except (InvocationFailure, DecodeFailure) as e:
        logger.error("Stage %s failed: %s", stage.name, e.category)
        raise stage_failure(stage.name, e) from e


async def _run_optional(stage, source, cfg, service) -> Optional[StageResult]:
    try:
        return await run_stage(stage, source, cfg, service)
    except (InvocationFailure, DecodeFailure) as e:
        logger.warning("Stage %s failed (%s), continuing without it", stage.name, e.category)
        return None


# Required stages raise a StageFailure, optional ones yield None
async def execute_stage(
    stage: StageSpec,
    source: Any,
    cfg: LLMConfig,
    service: Optional[InferenceService] = None,
) -> Optional[StageResult]:
    runner = _run_required if stage.required else _run_optional
    return await runner(stage, source, cfg, service)


# Await both branches; if one raises, cancel the other before re-raising
async def _join(*aws: Awaitable[Any]) -> List[Any]:
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _run_pipeline(
    syllabus_text: str,
    cfg: LLMConfig,
    service: Optional[InferenceService],
    now: Callable[[], datetime],
) -> StudyGuide:

    # 1. Core extraction, the only stage that reads the syllabus
    core: CoreData = await execute_stage(CORE_STAGE, syllabus_text, cfg, service)
    logger.info("Core data extracted: %s", core.course_name)
    results: Dict[str, StageResult] = {"core": core}

    # 2 & 3. Analysis and content in parallel; both must succeed
    analysis, content = await _join(
        execute_stage(ANALYSIS_STAGE, dict(results), cfg, service),
        execute_stage(CONTENT_STAGE, dict(results), cfg, service),
    )
    results["analysis"] = analysis
    results["content"] = content

    # 4 & 5. Strategy and priority in parallel; priority may fail
    strategy, priority = await _join(
        execute_stage(STRATEGY_STAGE, dict(results), cfg, service),
        execute_stage(PRIORITY_STAGE, dict(results), cfg, service),
    )

    return StudyGuide(
        core=core,
        analysis=analysis,
        content=content,
        strategy=strategy,
        priority=priority,
        generated_at=now(),
    )


async def generate_study_guide(
    syllabus_text: str,
    cfg: Optional[LLMConfig] = None,
    service: Optional[InferenceService] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    now: Callable[[], datetime] = _utcnow,
) -> StudyGuide:
    """
    Turn syllabus text into a StudyGuide.

    Stages run core -> (analysis || content) -> (strategy || priority).
    Failures of the first four stages raise StageFailure; a priority failure
    only leaves `priority` empty. Exceeding `timeout_s` raises TimeoutFailure
    and abandons all in-flight calls.
    """
    cfg = cfg or LLMConfig()
    start = time.perf_counter()
    logger.info("Starting pipeline (%d chars, primary model %s)", len(syllabus_text), cfg.model)

    try:
        guide = await asyncio.wait_for(
            _run_pipeline(syllabus_text, cfg, service, now), timeout=timeout_s
        )
    except asyncio.TimeoutError as e:
        logger.error("Pipeline exceeded its %.0fs budget", timeout_s)
        raise TimeoutFailure(f"Generation exceeded {timeout_s:.0f}s") from e

    logger.info(
        "Pipeline finished in %.1fs (priority intel %s)",
        time.perf_counter() - start,
        "present" if guide.priority is not None else "absent",
    )
    return guide


# Blocking entry point for scripts
def generate(syllabus_text: str, **kwargs) -> StudyGuide:
    return asyncio.run(generate_study_guide(syllabus_text, **kwargs))
