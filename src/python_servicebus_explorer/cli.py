"""
CLI entry point for Service Bus Explorer
"""
from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config_helper import ConfigHelper
from .errors import ErrorKind, ExplorationResult
from .explorer import ServiceBusExplorer

BANNER = "Service Bus Topics and Subscriptions Explorer"
PROMPT = "Enter Azure Service Bus connection string: "


def read_connection_string(argument: Optional[str]) -> str:
    """Return the argument, or prompt for the connection string on stdin."""
    if argument is not None:
        return argument
    try:
        return input(PROMPT)
    except EOFError:
        return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servicebus-explorer",
        description="Service Bus Explorer - Export topics, subscriptions and rules to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Prompt for the connection string, write to the current directory
  servicebus-explorer

  # Pass the connection string directly
  servicebus-explorer "Endpoint=sb://my-ns.servicebus.windows.net/;SharedAccessKeyName=...;SharedAccessKey=..."

  # Use a config file (namespace label, output directory and file names)
  servicebus-explorer --config servicebus_explorer.yaml "Endpoint=sb://..."
        """
    )

    parser.add_argument(
        'connection_string',
        nargs='?',
        help='Service Bus connection string (prompted for when omitted)'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file (servicebus_explorer.yaml)'
    )
    parser.add_argument(
        '--namespace-name',
        type=str,
        help='Label of the exported namespace (default: DefaultNamespace)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory to write the JSON files to (default: current directory)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode (show full tracebacks)'
    )
    return parser


def report_error(result: ExplorationResult) -> None:
    error = result.error
    print(f"Error: {error.message}", file=sys.stderr)
    if error.kind is ErrorKind.API and error.cause is not None:
        traceback.print_exception(type(error.cause), error.cause, error.cause.__traceback__)


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for explorer"""
    args = build_parser().parse_args(argv)

    print(BANNER)
    print("-" * len(BANNER))

    try:
        connection_string = read_connection_string(args.connection_string)

        if args.config:
            config_file = Path(args.config)
            start_path = config_file.parent if config_file.parent != Path('.') else Path.cwd()
            config_helper = ConfigHelper(start_path=start_path, config_file_name=config_file.name)
            explorer = ServiceBusExplorer.from_config(connection_string, config_helper)
        else:
            explorer = ServiceBusExplorer(connection_string=connection_string)

        if args.namespace_name:
            explorer.namespace_name = args.namespace_name
        if args.output_dir:
            output_dir = Path(args.output_dir)
            if not output_dir.is_dir():
                raise ValueError(f"Output directory not found or not a directory: {output_dir}")
            explorer.writer.output_dir = output_dir

        result = explorer.explore_once()

        if not result.ok:
            report_error(result)
            sys.exit(1)

        print()
        print(f"[EXPLORE] Summary: {len(result.written)} files written")
        sys.exit(0)

    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n[EXPLORE] Interrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
