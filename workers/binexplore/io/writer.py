"""
Writer — serialize explorer outputs to disk.

Filesystem layout per target:
    <output_dir>/explore_report.json
    <output_dir>/disassembly.objdump
"""
import json
from pathlib import Path

from binexplore.io.schema import ExploreReport

REPORT_FILENAME = "explore_report.json"
DISASSEMBLY_FILENAME = "disassembly.objdump"


def write_outputs(
    report: ExploreReport,
    disassembly: str,
    output_dir: Path,
) -> Path:
    """
    Write explore_report.json and disassembly.objdump into *output_dir*.

    Creates *output_dir* if it does not exist.
    Returns the output directory path.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    (output_dir / REPORT_FILENAME).write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    (output_dir / DISASSEMBLY_FILENAME).write_text(disassembly)

    return output_dir
