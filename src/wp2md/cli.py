#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/cli.py
"""Command-line interface for wp2md.

Two subcommands are provided: ``export`` turns the posts of WordPress
export files into Jekyll Markdown files, and ``convert`` converts a single
HTML fragment.

Examples
--------
Export a blog into a Jekyll ``_posts`` directory, caching images:
    $ wp2md export blog.wordpress.xml --output-dir _posts --asset-dir assets

Compute cached image names without touching the network:
    $ wp2md export blog.wordpress.xml --asset-dir assets --skip-download

Convert one fragment from stdin:
    $ echo "<p><b>hi</b></p>" | wp2md convert

Use environment variables for defaults:
    $ export WP2MD_ASSET_DIR=./assets
    $ export WP2MD_RICH=true
    $ wp2md export blog.wordpress.xml
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from wp2md.constants import DEFAULT_CACHE_PREFIX, DEFAULT_FETCH_TIMEOUT, DEFAULT_LAYOUT, ENV_PREFIX
from wp2md.exceptions import ValidationError, Wp2MdError
from wp2md.exporter import ExportSummary, WordPressExporter
from wp2md.html2markdown import HTMLToMarkdown
from wp2md.logging_utils import configure_logging
from wp2md.options import ConversionOptions, ExportOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2

_TRUE_VALUES = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with WP2MD_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'rich', 'asset_dir')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    return os.environ.get(f"{ENV_PREFIX}{key.upper().replace('-', '_')}")


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    Subcommand parsers are handled recursively. Command-line arguments
    still take precedence over environment variables.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify

    """
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            for subparser in action.choices.values():
                apply_env_vars_to_parser(subparser)
            continue
        if not action.dest or action.dest in ("help", "version") or not action.option_strings:
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if action.type is float:
            try:
                action.default = float(env_value)
            except ValueError:
                logger.warning("Invalid float value for %s: %s", env_name, env_value)
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning("Invalid choice for %s: %s. Choices: %s", env_name, env_value, list(action.choices))
        elif isinstance(action, argparse._StoreTrueAction):
            action.default = env_value.lower() in _TRUE_VALUES
        elif isinstance(action, argparse._StoreFalseAction):
            action.default = env_value.lower() not in _TRUE_VALUES
        elif isinstance(action, argparse._AppendAction):
            action.default = [value.strip() for value in env_value.split(",") if value.strip()]
        else:
            action.default = env_value


def _get_version() -> str:
    """Get the version of the wp2md package."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("wp2md")
    except PackageNotFoundError:
        return "unknown"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--rich", action="store_true", help="Enable rich terminal output with formatting")


def _add_conversion_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--asset-dir",
        help="Directory for cached images; when unset, images keep their original URLs",
    )
    parser.add_argument(
        "--skip-download",
        action="store_true",
        help="Compute cached image names without downloading anything",
    )
    parser.add_argument(
        "--image-in-blockquote",
        choices=["fail", "warn"],
        default="fail",
        help="Images inside blockquotes: 'fail' aborts the post, 'warn' logs and omits the image (default: fail)",
    )
    parser.add_argument(
        "--html-parser",
        choices=["html.parser", "html5lib", "lxml"],
        default="html.parser",
        help="BeautifulSoup parser used for post bodies (default: html.parser)",
    )
    parser.add_argument(
        "--overwrite-assets",
        action="store_true",
        help="Download images again even when already cached",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_FETCH_TIMEOUT,
        help=f"Timeout in seconds for each image download (default: {DEFAULT_FETCH_TIMEOUT})",
    )
    parser.add_argument("--user-agent", help="User-Agent header for image downloads")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(common)

    parser = argparse.ArgumentParser(
        prog="wp2md",
        description="Convert WordPress export files into Jekyll Markdown posts.",
    )
    parser.add_argument("--version", "-v", action="version", version=f"wp2md {_get_version()}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    export_parser = subparsers.add_parser(
        "export",
        parents=[common],
        help="Export the posts of WordPress export (WXR) files",
        description="Write one <date>-<name>.md file (and the raw .html) per published post.",
    )
    export_parser.add_argument("input", nargs="+", help="WordPress export file(s)")
    export_parser.add_argument("--output-dir", "-o", default=".", help="Directory for the converted posts")
    _add_conversion_arguments(export_parser)
    export_parser.add_argument("--no-html", action="store_true", help="Do not write the raw HTML next to each post")
    export_parser.add_argument(
        "--status",
        action="append",
        help="Export records with this wp:status (repeatable, default: publish)",
    )
    export_parser.add_argument(
        "--post-type",
        action="append",
        help="Export records with this wp:post_type (repeatable, default: post)",
    )
    export_parser.add_argument(
        "--layout",
        default=DEFAULT_LAYOUT,
        help=f"Jekyll layout written into the front matter (default: {DEFAULT_LAYOUT})",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        parents=[common],
        help="Convert a single HTML fragment to Markdown",
        description="Convert an HTML fragment read from a file or stdin.",
    )
    convert_parser.add_argument("input", nargs="?", default="-", help="HTML file, or '-' for stdin (default)")
    convert_parser.add_argument("--out", help="Write Markdown to this file instead of stdout")
    _add_conversion_arguments(convert_parser)
    convert_parser.add_argument(
        "--cache-prefix",
        default=DEFAULT_CACHE_PREFIX,
        help=f"Prefix for cached image names (default: {DEFAULT_CACHE_PREFIX})",
    )

    apply_env_vars_to_parser(parser)
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from the parsed arguments; --trace forces DEBUG."""
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def check_rich_available() -> bool:
    """Check if Rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream=None) -> bool:
    """Rich output is used when --rich is set, Rich is installed and the stream is a TTY."""
    if not args.rich or not check_rich_available():
        return False
    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def build_conversion_options(parsed_args: argparse.Namespace) -> ConversionOptions:
    """Build converter options from parsed arguments."""
    return ConversionOptions(
        asset_directory=parsed_args.asset_dir,
        cache_prefix=getattr(parsed_args, "cache_prefix", DEFAULT_CACHE_PREFIX),
        skip_download=parsed_args.skip_download,
        image_in_blockquote=parsed_args.image_in_blockquote,
        html_parser=parsed_args.html_parser,
        overwrite_assets=parsed_args.overwrite_assets,
        fetch_timeout=parsed_args.timeout,
        user_agent=parsed_args.user_agent,
    )


def build_export_options(parsed_args: argparse.Namespace) -> ExportOptions:
    """Build export options from parsed arguments."""
    overrides = {}
    if parsed_args.status:
        overrides["statuses"] = tuple(parsed_args.status)
    if parsed_args.post_type:
        overrides["post_types"] = tuple(parsed_args.post_type)
    return ExportOptions(
        output_dir=parsed_args.output_dir,
        write_html=not parsed_args.no_html,
        layout=parsed_args.layout,
        conversion=build_conversion_options(parsed_args),
        **overrides,
    )


def render_summary(summary: ExportSummary, use_rich: bool) -> None:
    """Print the outcome of an export to stderr.

    Parameters
    ----------
    summary : ExportSummary
        Export outcome
    use_rich : bool
        Render with Rich tables instead of plain text

    """
    counts = [
        ("Written", len(summary.written)),
        ("Skipped", len(summary.skipped)),
        ("Failed", len(summary.failed)),
        ("Issues", len(summary.issues)),
    ]

    if use_rich:
        from rich.console import Console
        from rich.table import Table

        console = Console(stderr=True)
        table = Table(title="Export Summary")
        table.add_column("Status", style="cyan", no_wrap=True)
        table.add_column("Count", style="magenta")
        for name, count in counts:
            table.add_row(name, str(count))
        console.print(table)

        if summary.failed:
            failures = Table(title="Failed Posts")
            failures.add_column("Post", style="cyan")
            failures.add_column("Error", style="red")
            for failure in summary.failed:
                failures.add_row(failure.post_label, failure.message)
            console.print(failures)
        return

    print("\nExport Summary", file=sys.stderr)
    print("=" * 40, file=sys.stderr)
    for name, count in counts:
        print(f"  {name + ':':10} {count}", file=sys.stderr)
    for failure in summary.failed:
        print(f"  ! {failure.post_label}: {failure.message}", file=sys.stderr)


def run_export(parsed_args: argparse.Namespace) -> int:
    """Execute the ``export`` subcommand."""
    missing = [path for path in parsed_args.input if not Path(path).is_file()]
    if missing:
        for path in missing:
            print(f"Error: Input file not found: {path}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    options = build_export_options(parsed_args)
    summary = WordPressExporter(options).export_files(parsed_args.input)
    render_summary(summary, should_use_rich_output(parsed_args))
    return EXIT_SUCCESS if summary.ok else EXIT_ERROR


def run_convert(parsed_args: argparse.Namespace) -> int:
    """Execute the ``convert`` subcommand."""
    if parsed_args.input == "-":
        html = sys.stdin.read()
        label = "stdin"
    else:
        input_path = Path(parsed_args.input)
        try:
            html = input_path.read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not read {input_path}: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        label = input_path.stem

    options = build_conversion_options(parsed_args)
    try:
        result = HTMLToMarkdown(options).convert_with_report(html, post_label=label)
    except Wp2MdError as e:
        logger.error("%s", e.message)
        return EXIT_ERROR

    if parsed_args.out:
        out_path = Path(parsed_args.out)
        try:
            out_path.write_text(result.markdown, encoding="utf-8", newline="")
        except OSError as e:
            logger.error("Could not write %s: %s", out_path, e)
            return EXIT_ERROR
    else:
        sys.stdout.write(result.markdown)
        sys.stdout.flush()

    for issue in result.issues:
        logger.debug("%s: %s", issue.kind.value, issue.detail)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the wp2md command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        if parsed_args.command == "export":
            return run_export(parsed_args)
        return run_convert(parsed_args)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
