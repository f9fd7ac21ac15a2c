from __future__ import annotations

import argparse
import json
import logging
import pprint
import sys
from pathlib import Path
from typing import Optional, Sequence

from mutagen import MutagenError

from . import containers, database
from .config import Settings, load_settings
from .errors import SeratoTagError
from .formats import Capability, parse_container
from .tags import TAG_KINDS, tag_class

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dump Serato DJ metadata tags")
    parser.add_argument("--config", type=Path, help="Path to serato-tags.yaml")
    parser.add_argument("--log-level", default=None, help="Python logging level")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a pretty repr")

    subparsers = parser.add_subparsers(dest="command", required=True)
    tag_parser = subparsers.add_parser("tag", help="Decode a raw tag payload read from a file")
    kinds = tag_parser.add_mutually_exclusive_group(required=True)
    for kind, tag_cls in TAG_KINDS.items():
        kinds.add_argument(
            f"--{kind}",
            dest="kind",
            action="store_const",
            const=kind,
            help=f"Decode a '{tag_cls.NAME}' payload",
        )
    tag_parser.add_argument(
        "--container",
        choices=[cap.value for cap in Capability],
        default=Capability.ID3.value,
        help="Container the payload was taken from (default: id3, i.e. raw GEOB data)",
    )
    tag_parser.add_argument("path", type=Path)

    audio_parser = subparsers.add_parser("audio", help="Decode a tag stored in an audio file")
    audio_parser.add_argument("kind", choices=sorted(TAG_KINDS))
    audio_parser.add_argument("path", type=Path)

    db_parser = subparsers.add_parser("database", help="Decode a 'database V2' or crate file")
    db_parser.add_argument("path", type=Path)
    return parser


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def emit(value: object, settings: Settings) -> None:
    if settings.output.format == "json":
        record = value.to_record() if hasattr(value, "to_record") else value
        print(json.dumps(record, indent=settings.output.indent or None))
        return
    pprint.pprint(value, indent=1, width=100, sort_dicts=False)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    if args.json:
        settings = settings.model_copy(update={"output": settings.output.model_copy(update={"format": "json"})})
    configure_logging(args.log_level or settings.log_level)

    path: Path = args.path
    try:
        match args.command:
            case "tag":
                data = path.read_bytes()
                logger.debug("Read %d bytes from %s", len(data), path)
                emit(parse_container(tag_class(args.kind), args.container, data), settings)
            case "audio":
                tag = containers.read_tag(path, tag_class(args.kind))
                if tag is None:
                    logger.error("No %s tag found in %s", TAG_KINDS[args.kind].NAME, path)
                    raise SystemExit(1)
                emit(tag, settings)
            case "database":
                emit(database.parse_file(path), settings)
            case _:
                parser.error("Unknown command")
    except SeratoTagError as exc:
        logger.error("Failed to decode %s: %s", path, exc)
        raise SystemExit(1)
    except (OSError, MutagenError, ValueError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        raise SystemExit(1)


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
