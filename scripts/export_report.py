"""Export the attendance CSV report without going through Flask.

Usage: python scripts/export_report.py 2026-10-01 2026-10-19 [output_dir]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from clockin_crew.common.datetime_utils import parse_iso_date
from clockin_crew.config import get_settings_module
from clockin_crew.container import build_container

logger = logging.getLogger("export_report")


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if len(argv) < 2:
        logger.error("usage: export_report.py START END [OUTPUT_DIR]")
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    export = container.report_service.export_csv(start=parse_iso_date(argv[0]), end=parse_iso_date(argv[1]))
    out_dir = Path(argv[2]) if len(argv) > 2 else Path.cwd()
    target = out_dir / export.filename
    target.write_text(export.content, encoding="utf-8")
    logger.info("Exported %d attendance records to %s", export.record_count, target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
