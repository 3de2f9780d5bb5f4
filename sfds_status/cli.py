"""
Command Line Interface for sfds-status.

Authenticates against a dedicated server's management API, collects its
state, options and advanced game settings, and prints one report. The exit
code tells schedulers whether anyone is playing.
"""

import argparse
import sys
from typing import List, Optional

from ._version import __version__
from .cli_helpers import describe_error, exit_with_error
from .common.config import OutputFormat, ProbeSettings, ServerConfig
from .common.constants import DEFAULT_SERVER_URL, ExitCodes
from .common.errors import ConfigError
from .common.logging_config import configure_logging, get_logger
from .core.probe import run_probe
from .core.render import render


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='sfds-status',
        description='Status probe for a dedicated game server management API',
        epilog=(
            'Exit codes: 0 = players online, 1 = no players online, 2 = error. '
            'Environment: SFDS_SERVER_URL, SFDS_ADMIN_PASSWORD, SFDS_OUTPUT_FORMAT, '
            'SFDS_TIMEOUT, SFDS_INSECURE, SFDS_LOG_LEVEL, NO_COLOR.'
        ),
    )
    parser.add_argument('--server-url', dest='server_url', default=None,
                        help=f'Base URL of the server API (default: {DEFAULT_SERVER_URL})')

    password_group = parser.add_mutually_exclusive_group()
    password_group.add_argument('--password', default=None,
                                help='Administrator password (prefer SFDS_ADMIN_PASSWORD or --password-file)')
    password_group.add_argument('--password-file', dest='password_file', default=None,
                                help='Read the administrator password from the first line of a file')

    parser.add_argument('--output-format', dest='output_format', default=None,
                        metavar='{console,json,csv}',
                        help='Report format (default: console)')
    parser.add_argument('--insecure', action='store_true',
                        help='Accept any TLS certificate, including self-signed or expired ones')
    parser.add_argument('--timeout', type=str, default=None,
                        help='Per-request timeout in seconds (default: 30)')
    parser.add_argument('--parallel', action='store_true',
                        help='Issue the three status queries concurrently')
    parser.add_argument('--no-color', dest='no_color', action='store_true',
                        help='Disable coloured console output')
    parser.add_argument('--log-level', dest='log_level', default=None,
                        help='Diagnostic log level on stderr (default: WARNING)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _use_color(config: ServerConfig) -> bool:
    if config.output_format is not OutputFormat.CONSOLE:
        return False
    if config.color is not None:
        return config.color
    isatty = getattr(sys.stdout, 'isatty', None)
    return bool(isatty and isatty())


def main(args: Optional[List[str]] = None, settings: Optional[ProbeSettings] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
        settings: Environment lookup (uses os.environ if None)
    """
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    # --help and --version exit here, before any network activity
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level)
    logger = get_logger(__name__)

    try:
        config = ServerConfig.from_args(parsed_args, settings)
    except ConfigError as exc:
        exit_with_error(describe_error(exc), ExitCodes.ERROR)

    logger.debug("Resolved configuration: %r", config)
    result = run_probe(config)
    if not result.ok:
        exit_with_error(describe_error(result.error), result.exit_code)

    print(render(config.output_format, result.record, result.snapshot, color=_use_color(config)))
    sys.exit(result.exit_code)


if __name__ == '__main__':
    main()
