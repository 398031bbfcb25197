"""
Script to export the configured database to a JSON file
"""

import argparse
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import get_engine
from core.exceptions import ExportException
from core.logging import setup_logging
from export.runner import ExportRunner
from export.stores.sqlalchemy_store import SQLAlchemyStore
from schemas.options import ExportOptions

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export store tables to JSON")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)
    parser.add_argument("--output", default=settings.EXPORT_OUTPUT_PATH)
    parser.add_argument("--prefix", default=settings.EXPORT_TABLE_PREFIX)
    parser.add_argument("--null-value", default=settings.EXPORT_NULL_VALUE)
    parser.add_argument("--date-format", default=settings.EXPORT_DATE_FORMAT)
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Export tables with unresolvable schemas as empty arrays"
    )
    return parser.parse_args(argv)


def run_export(argv=None) -> int:
    """Run the export; returns the process exit code"""
    args = parse_args(argv)

    options = ExportOptions(
        null_value=args.null_value,
        table_prefix=args.prefix,
        date_format=args.date_format,
        strict_schema=settings.EXPORT_STRICT_SCHEMA and not args.lenient,
    )

    engine = get_engine(args.database_url)
    try:
        runner = ExportRunner(SQLAlchemyStore(engine), options=options)
        result = runner.export_to_file(args.output)
        logger.info(
            f"Export written to {result['path']}: "
            f"Tables={result['tables_exported']}, "
            f"Rows={result['rows_exported']}"
        )
        return 0

    except ExportException as e:
        logger.error(f"Export failed: {e}")
        return 1

    finally:
        engine.dispose()


if __name__ == "__main__":
    setup_logging(parse_args().log_level)
    sys.exit(run_export())
