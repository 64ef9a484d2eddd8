"""
Explore Router
Disassemble a binary/object file with objdump and return its
section → function symbol tree.

Two endpoints:
  GET  /explore/tool   — validate the configured objdump
  POST /explore/run    — disassemble one target (runs in a worker thread)
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from app.config import settings
from binexplore import EXPLORER_VERSION, PACKAGE_NAME  # type: ignore
from binexplore.core.arguments import DumpConfig  # type: ignore
from binexplore.core.locator import ToolDescriptor, ToolLocator  # type: ignore
from binexplore.io.schema import ExploreReport  # type: ignore
from binexplore.policy.profile import Profile  # type: ignore
from binexplore.runner import run_explore  # type: ignore

logger = logging.getLogger(__name__)


def _profile() -> Profile:
    return replace(Profile.v0(), timeout=settings.OBJDUMP_TIMEOUT)


# =============================================================================
# Request/Response Models
# =============================================================================

class ExploreRunRequest(BaseModel):
    """Request to disassemble a single target."""
    target_path: str = Field(
        ...,
        description="Absolute path to the binary or object file",
        examples=["/files/artifacts/synthetic/t01/O0/debug/bin/t01"],
    )
    options: Optional[Union[str, List[str]]] = Field(
        None,
        description="Raw objdump options; overrides flags. Defaults to OBJDUMP_OPTIONS; send \"\" to use flags.",
    )
    flags: Optional[Dict[str, bool]] = Field(
        None,
        description="Long objdump switches by name. Defaults to OBJDUMP_FLAGS.",
    )
    include_text: bool = Field(
        False,
        description="Include the raw disassembly in the response",
    )
    write_outputs: bool = Field(
        False,
        description="Write report + disassembly under OUTPUT_ROOT",
    )


class ExploreRunResponse(BaseModel):
    report: ExploreReport
    disassembly: Optional[str] = None
    output_dir: Optional[str] = None


class ToolStatusResponse(BaseModel):
    package_name: str = PACKAGE_NAME
    explorer_version: str = EXPLORER_VERSION
    configured_path: str
    valid: bool
    path: Optional[str] = None
    version: Optional[str] = None
    error_kind: Optional[str] = None
    detail: Optional[str] = None


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


@router.get(
    "/tool",
    response_model=ToolStatusResponse,
    summary="Validate the configured objdump binary",
)
async def tool_status():
    """Resolve and probe ``OBJDUMP_PATH`` (no fallback to the default)."""
    result = await run_in_threadpool(
        ToolLocator(profile=_profile()).validate, settings.OBJDUMP_PATH
    )
    if isinstance(result, ToolDescriptor):
        return ToolStatusResponse(
            configured_path=settings.OBJDUMP_PATH,
            valid=result.verified,
            path=result.path,
            version=result.version,
        )
    return ToolStatusResponse(
        configured_path=settings.OBJDUMP_PATH,
        valid=False,
        error_kind=result.kind.value,
        detail=result.detail,
    )


@router.post(
    "/run",
    response_model=ExploreRunResponse,
    status_code=status.HTTP_200_OK,
    summary="Disassemble one target and build its symbol tree",
)
async def run_explore_endpoint(request: ExploreRunRequest):
    """
    Run objdump on ``target_path`` and return the report.

    Request values override the service defaults::

        options  → OBJDUMP_OPTIONS
        flags    → OBJDUMP_FLAGS

    Failures (wrong tool, bad flag, not an object file) come back as a
    REJECT report with an ``error`` block, not as HTTP errors.
    """
    target = Path(request.target_path)
    if not target.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Target not found: {target}",
        )

    out_dir = None
    if request.write_outputs:
        if not settings.OUTPUT_ROOT:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="OUTPUT_ROOT is not configured",
            )
        out_dir = Path(settings.OUTPUT_ROOT) / target.name

    config = DumpConfig(
        raw=request.options if request.options is not None else settings.OBJDUMP_OPTIONS,
        flags=request.flags if request.flags is not None else settings.OBJDUMP_FLAGS,
    )

    report, text = await run_in_threadpool(
        run_explore,
        str(target),
        config=config,
        tool_path=settings.OBJDUMP_PATH,
        profile=_profile(),
        output_dir=out_dir,
    )

    if report.verdict == "REJECT":
        logger.warning(
            "Explore rejected %s: %s", target, report.error.detail if report.error else report.reasons
        )

    return ExploreRunResponse(
        report=report,
        disassembly=text if request.include_text else None,
        output_dir=str(out_dir) if out_dir else None,
    )
