"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.

Command Structure:
    - generate <source>          Resource examples for every type
    - example  <source> <type>   Example for a single type identifier
    - types    <source>          Qualified names of all declared types (--json for the full model)

``<source>`` is a metadata file path or an http(s) URL.
"""

import argparse
from typing import Callable, Dict, Optional


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_source_argument(parser: argparse.ArgumentParser) -> None:
    """Add the positional metadata source."""
    parser.add_argument(
        'source',
        help='CSDL metadata file path or URL (e.g. https://host/service/$metadata)'
    )


def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging flags."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=None,
        help='Logging level (default: from config, else INFO)'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write logs to this file'
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add output-related flags."""
    parser.add_argument(
        '--output', '-o',
        help='Output file path (default: stdout)'
    )
    parser.add_argument(
        '--pretty',
        action='store_true',
        help='Indent JSON output'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser(handlers: Optional[Dict[str, Callable]] = None) -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Args:
        handlers: Optional mapping of command name to handler function,
            stored as ``func`` on the parsed namespace.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    handlers = handlers or {}

    parser = argparse.ArgumentParser(
        prog='csdl-examples',
        description="Generate JSON examples from OData CSDL metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s generate metadata.xml --output resources.json
    %(prog)s generate https://services.odata.org/V4/TripPinService/$metadata --pretty
    %(prog)s example metadata.xml "Collection(Test.Person)"
    %(prog)s types metadata.xml
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    generate_parser = subparsers.add_parser(
        'generate', help='Generate resource examples for every complex and entity type'
    )
    add_source_argument(generate_parser)
    add_output_flags(generate_parser)
    add_config_flags(generate_parser)
    generate_parser.set_defaults(func=handlers.get('generate'))

    example_parser = subparsers.add_parser('example', help='Print the example for one type identifier')
    add_source_argument(example_parser)
    example_parser.add_argument('type_identifier', help='Type identifier, e.g. Test.Person or Collection(Edm.String)')
    add_output_flags(example_parser)
    add_config_flags(example_parser)
    example_parser.set_defaults(func=handlers.get('example'))

    types_parser = subparsers.add_parser('types', help='List declared types in emission order')
    add_source_argument(types_parser)
    types_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the parsed schemas as JSON instead of a name listing'
    )
    add_config_flags(types_parser)
    types_parser.set_defaults(func=handlers.get('types'))

    return parser
