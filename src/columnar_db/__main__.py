"""Command-line entry point.

Usage:
    python -m columnar_db [--data-dir DIR]          # interactive REPL
    python -m columnar_db [--data-dir DIR] --serve  # REST API
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from columnar_db.adapters.inbound.repl import run_repl
from columnar_db.application import ColumnarDatabase
from columnar_db.infrastructure.config import Config, get_config
from columnar_db.infrastructure.logging import setup_logging
from columnar_db.infrastructure.metrics import setup_metrics
from columnar_db.infrastructure.tracing import setup_tracing


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="columnar_db",
        description="Minimal column-store database with a text command interface",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding table records (default: COLUMNAR_DB_STORAGE__DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the REST API instead of the interactive REPL",
    )
    return parser


def load_config(data_dir: Path | None = None) -> Config:
    """Global configuration, or a fresh one pointed at ``data_dir``."""
    if data_dir is None:
        return get_config()
    config = Config()
    config.storage.data_dir = data_dir
    config.ensure_directories()
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = load_config(args.data_dir)
    obs = config.observability

    setup_logging(obs.log_level, obs.log_format)
    if obs.otel_endpoint:
        setup_tracing(obs.otel_service_name, otlp_endpoint=obs.otel_endpoint)
    metrics = setup_metrics(config.server.metrics_port) if obs.metrics_enabled else None

    with ColumnarDatabase(config=config, metrics=metrics) as db:
        if args.serve:
            from columnar_db.adapters.inbound.rest_api import run_server

            run_server(db, host=config.server.host, port=config.server.port)
        else:
            run_repl(db, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
