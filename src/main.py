#!/usr/bin/env python3
"""
OData CSDL Example Generator

Main entry point for generating JSON examples from CSDL metadata.

Usage:
    python main.py generate <metadata.xml|url> [--output <resources.json>] [--pretty]
    python main.py example <metadata.xml|url> <type_identifier> [--pretty]
    python main.py types <metadata.xml|url> [--json]
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.cli.helpers import load_config, setup_logging
from app.cli.parsers import create_argument_parser
from constants import ExampleConfig, ExitCode, LoggingConfig
from formats.csdl import (
    CSDLParseError,
    EntityType,
    ExampleGenerator,
    Schema,
    generate_resources,
    serialize_example,
)
from metadata_client import MetadataClientConfig, MetadataFetchError, read_schemas

logger = logging.getLogger(__name__)


def _prepare(args) -> Dict[str, Any]:
    """Load configuration and set up logging for a command."""
    config = load_config(args.config) if args.config else {}

    logging_config = dict(config.get('logging') or {})
    if args.log_level:
        logging_config['level'] = args.log_level
    setup_logging(
        level=LoggingConfig.DEFAULT_LOG_LEVEL,
        log_file=args.log_file,
        config=logging_config,
    )
    return config


def _load_schemas(args, config: Dict[str, Any]) -> List[Schema]:
    client_config = MetadataClientConfig.from_dict(config.get('metadata') or {})
    schemas = read_schemas(args.source, client_config)
    logger.info(f"Loaded {len(schemas)} schema(s) from {args.source}")
    return schemas


def _max_depth(config: Dict[str, Any]) -> Optional[int]:
    """Read examples.max_depth; null in the config file disables the limit."""
    examples_config = config.get('examples') or {}
    if 'max_depth' not in examples_config:
        return ExampleConfig.MAX_EXPANSION_DEPTH
    value = examples_config['max_depth']
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"examples.max_depth must be an integer or null, got {value!r}")
    return value


def _write_output(text: str, output: Optional[str]) -> None:
    if not output:
        print(text)
        return
    path = Path(output)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding='utf-8')
    logger.info(f"Wrote {output}")


def cmd_generate(args) -> int:
    """Generate resource examples for every declared type."""
    config = _prepare(args)
    schemas = _load_schemas(args, config)

    resources = generate_resources(schemas, _max_depth(config))
    payload = [resource.to_dict() for resource in resources]

    _write_output(json.dumps(payload, indent=2 if args.pretty else None, ensure_ascii=False), args.output)
    return ExitCode.SUCCESS


def cmd_example(args) -> int:
    """Print the example for one type identifier."""
    config = _prepare(args)
    schemas = _load_schemas(args, config)

    value = ExampleGenerator(schemas, _max_depth(config)).generate(args.type_identifier)

    _write_output(serialize_example(value, indent=2 if args.pretty else None), args.output)
    return ExitCode.SUCCESS


def cmd_types(args) -> int:
    """List declared types in the order resources are emitted."""
    config = _prepare(args)
    schemas = _load_schemas(args, config)

    if args.json:
        print(json.dumps([schema.to_dict() for schema in schemas], indent=2, ensure_ascii=False))
        return ExitCode.SUCCESS

    for schema in schemas:
        for declared in schema.iter_types():
            kind = "EntityType" if isinstance(declared, EntityType) else "ComplexType"
            print(f"{schema.namespace}.{declared.name}\t{kind}")
    return ExitCode.SUCCESS


def run_command(args) -> int:
    """Run a parsed command, mapping failures to exit codes."""
    try:
        return args.func(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.FILE_NOT_FOUND
    except CSDLParseError as e:
        logger.error(f"Invalid metadata document: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.VALIDATION_ERROR
    except MetadataFetchError as e:
        logger.error(f"Metadata retrieval failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.API_ERROR
    except (ValueError, TypeError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = create_argument_parser({
        'generate': cmd_generate,
        'example': cmd_example,
        'types': cmd_types,
    })
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(ExitCode.ERROR)

    sys.exit(int(run_command(args)))


if __name__ == '__main__':
    main()
