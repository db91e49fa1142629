import argparse
import sys
from typing import Optional, Sequence

from .exceptions import FlowLogTaggerError
from .core.config import load_settings
from .logging import get_logger, set_log_level
from .pipeline import run_pipeline

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowlog-tagger",
        description="Tag flow log records by destination port and protocol",
        epilog="Example: flowlog-tagger protocol.csv lookup.csv log.txt custom-output.txt",
    )
    parser.add_argument("protocol_file", help="CSV of protocol numbers/ranges to keywords")
    parser.add_argument("lookup_file", help="CSV of dstport,protocol,tag rows")
    parser.add_argument("flow_log_file", help="version 2 flow log, one record per line")
    parser.add_argument(
        "output_file", nargs="?", default=None, help="report path (default: output.txt)"
    )
    parser.add_argument("--config", help="YAML or JSON settings file")
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        default=None,
        help="skip malformed rows and lines instead of aborting",
    )
    parser.add_argument(
        "--sort", dest="sort_report", action="store_true", default=None, help="sort report rows"
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            skip_malformed=args.skip_malformed,
            sort_report=args.sort_report,
            log_level=args.log_level,
        )
        set_log_level(settings.log_level)
        output_file = args.output_file or settings.default_output_path
        run_pipeline(
            args.protocol_file,
            args.lookup_file,
            args.flow_log_file,
            output_file,
            settings=settings,
        )
    except FlowLogTaggerError as exc:
        logger.error("%s failed: %s", type(exc).__name__, exc)
        print(f"Error: {exc}", file=sys.stderr)
        if exc.suggestion:
            print(f"Hint: {exc.suggestion}", file=sys.stderr)
        return 1

    print(f"Flow log parsing completed. Output written to: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
