"""
Explorer runner — top-level orchestration: target → report + text.

This module ties classification, tool validation, argument building,
invocation and symbol extraction into a single ``run_explore``
function that can be called from the API endpoint or from the CLI.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from binexplore.core.arguments import DumpConfig, build_args, unknown_switches
from binexplore.core.classifier import FileClassifier
from binexplore.core.elf_meta import compute_sha256, read_elf_header
from binexplore.core.executor import CommandExecutor, SubprocessExecutor
from binexplore.core.invoker import Invoker
from binexplore.core.locator import ToolLocator
from binexplore.core.result import ErrorKind, Failure
from binexplore.core.symbols import count_symbols, extract_symbols
from binexplore.io.schema import (
    ElfHeaderModel,
    ErrorModel,
    ExploreReport,
    SymbolModel,
    TargetModel,
    ToolModel,
)
from binexplore.io.writer import write_outputs
from binexplore.policy.profile import Profile
from binexplore.policy.verdict import TargetRejectReason, Verdict, gate_target

logger = logging.getLogger(__name__)


def _reject(
    report: ExploreReport,
    reason: TargetRejectReason,
    failure: Failure,
) -> ExploreReport:
    report.verdict = Verdict.REJECT.value
    report.reasons.append(reason.value)
    report.error = ErrorModel(kind=failure.kind.value, detail=failure.detail)
    return report


def _finish(
    report: ExploreReport,
    text: str,
    output_dir: Optional[Path],
) -> Tuple[ExploreReport, str]:
    if output_dir:
        write_outputs(report, text, output_dir)
    return report, text


def run_explore(
    target_path: str,
    config: Optional[DumpConfig] = None,
    tool_path: Optional[str] = None,
    profile: Optional[Profile] = None,
    executor: Optional[CommandExecutor] = None,
    output_dir: Optional[Path] = None,
) -> Tuple[ExploreReport, str]:
    """
    Disassemble one target and build its symbol tree.

    Parameters
    ----------
    target_path : str
        Binary or object file to inspect.
    config : DumpConfig, optional
        Raw override and/or boolean switches.  Defaults to the baseline.
    tool_path : str, optional
        Configured objdump path.  Defaults to the profile's
        search-path sentinel.
    profile : Profile, optional
        Policy knobs.  Defaults to Profile.v0().
    executor : CommandExecutor, optional
        Process runner; tests pass a fake.
    output_dir : Path, optional
        Directory to write the report and raw text.  If None, nothing
        is written to disk.

    Returns
    -------
    (ExploreReport, disassembly_text)
        The text is empty whenever the verdict is REJECT.
    """
    if profile is None:
        profile = Profile.v0()
    if config is None:
        config = DumpConfig()
    if executor is None:
        executor = SubprocessExecutor()
    if tool_path is None:
        tool_path = profile.search_path_sentinel

    report = ExploreReport(
        profile_id=profile.profile_id,
        target_path=target_path,
        verdict=Verdict.ACCEPT.value,
    )

    # ── Step 1: classify + gate ──────────────────────────────────────
    fc = FileClassifier(logger).classify(target_path)
    report.target = TargetModel(
        is_executable=fc.is_executable,
        is_object_like=fc.is_object_like,
        container=fc.container,
        readable=fc.readable,
    )
    verdict, reasons = gate_target(fc, profile)
    report.reasons.extend(reasons)

    if verdict == Verdict.REJECT:
        report.verdict = verdict.value
        report.error = ErrorModel(
            kind=ErrorKind.NOT_OBJECT_FILE.value,
            detail=f"{target_path} is not a recognised object file",
        )
        return _finish(report, "", output_dir)

    try:
        report.target_sha256 = compute_sha256(target_path)
    except OSError as e:
        logger.warning("Cannot hash %s: %s", target_path, e)
        report.target.readable = False
        failure = Failure(ErrorKind.NOT_OBJECT_FILE, f"Cannot read {target_path}: {e}")
        return _finish(
            _reject(report, TargetRejectReason.UNREADABLE, failure),
            "",
            output_dir,
        )

    if fc.container == "elf":
        header = read_elf_header(target_path)
        if header is not None:
            report.target.elf = ElfHeaderModel(
                machine=header.machine,
                elf_class=header.elf_class,
                endianness=header.endianness,
                file_type=header.file_type,
            )

    # ── Step 2: locate the tool ──────────────────────────────────────
    located = ToolLocator(executor, profile, logger).validate_or_default(tool_path)
    if isinstance(located, Failure):
        return _finish(
            _reject(report, TargetRejectReason.TOOL_UNAVAILABLE, located),
            "",
            output_dir,
        )
    report.tool = ToolModel(
        path=located.path, verified=located.verified, version=located.version
    )

    # ── Step 3: arguments ────────────────────────────────────────────
    ignored: List[str] = unknown_switches(config)
    if ignored:
        logger.warning("Ignoring unknown objdump switches: %s", ", ".join(ignored))
    args = build_args(config, profile.baseline_args)
    report.args = args

    # ── Step 4: invoke ───────────────────────────────────────────────
    result = Invoker(executor, profile.timeout, logger).run(
        located.path, args, target_path
    )
    if isinstance(result, Failure):
        return _finish(
            _reject(report, TargetRejectReason.INVOCATION_FAILED, result),
            "",
            output_dir,
        )

    text = result.stdout
    if not text.strip():
        failure = Failure(
            ErrorKind.PARSE_EMPTY_OUTPUT,
            f"objdump produced no output for {target_path}",
        )
        return _finish(
            _reject(report, TargetRejectReason.EMPTY_OUTPUT, failure),
            "",
            output_dir,
        )

    # ── Step 5: symbols ──────────────────────────────────────────────
    tree = extract_symbols(text)
    report.symbols = [SymbolModel.from_symbol(s) for s in tree]
    report.symbol_counts = count_symbols(tree)
    report.n_output_lines = len(text.splitlines())

    return _finish(report, text, output_dir)


# ── CLI ──────────────────────────────────────────────────────────────────────

def main():
    """CLI entry point for binexplore."""
    parser = argparse.ArgumentParser(
        description="binexplore — objdump-driven section/function explorer",
    )
    parser.add_argument("target", help="Binary or object file to inspect")
    parser.add_argument(
        "--objdump",
        default=None,
        help='objdump path, or "objdump" to resolve from $PATH (default)',
    )
    parser.add_argument(
        "--options",
        default=None,
        help='Raw objdump options, e.g. "-d -S" (overrides --flag)',
    )
    parser.add_argument(
        "--flag",
        action="append",
        default=[],
        metavar="NAME",
        help="Enable a long objdump switch by name (repeatable)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=None,
        help="Directory to write the report and raw disassembly",
    )
    parser.add_argument(
        "--print-text",
        action="store_true",
        help="Print the raw disassembly instead of the JSON report",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = DumpConfig(raw=args.options, flags={name: True for name in args.flag})
    report, text = run_explore(
        args.target,
        config=config,
        tool_path=args.objdump,
        output_dir=args.output_dir,
    )

    if args.print_text:
        sys.stdout.write(text)
    else:
        print(json.dumps(report.model_dump(mode="json"), indent=2, sort_keys=True))

    if args.output_dir:
        logger.info("Outputs written to: %s", args.output_dir)

    if report.verdict == Verdict.REJECT.value:
        sys.exit(1)


if __name__ == "__main__":
    main()
