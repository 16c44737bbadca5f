import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape

from exportplist.arguments import create_parser, normalize_args, validate_required
from exportplist.commands.custom_options import write_custom_content
from exportplist.logger import get_console
from exportplist.src.constants.cli_constants import KNOWN_EXPORT_METHODS
from exportplist.src.export.options_writer import (
    build_export_options,
    confirm_export_options,
    write_export_options,
)


def warn_unknown_method(method: Optional[str], console) -> None:
    """Warn about methods xcodebuild won't recognise; they are still written."""
    if method is None:
        console.print("[yellow]Warning: export_method not specified, writing no method[/]")
    elif method not in KNOWN_EXPORT_METHODS:
        console.print(
            f"[yellow]Warning: '{escape(method)}' is not a known export method "
            f"({', '.join(KNOWN_EXPORT_METHODS)})[/]"
        )


def main(argv=None, parsed_args=None) -> int:
    """Write export options with the method given on the command line.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:])
        parsed_args: Optional pre-parsed arguments (from CLI)
    """
    console = get_console()

    if parsed_args is None:
        parser = create_parser(
            prog="generate-export-options",
            description="Generate an export options plist with an explicit export method.",
            with_export_method=True,
        )
        args = parser.parse_args(argv)
    else:
        args = parsed_args
    normalize_args(args)

    console.print()
    if not validate_required(args, console):
        return 1

    if args.custom_export_options_plist_content is not None:
        return write_custom_content(args, console, ("export_method", "team_id"))

    method = args.export_method

    console.print()
    console.print("[bold blue]==> Create export options[/]")
    warn_unknown_method(method, console)

    export_options = build_export_options(method, team_id=args.team_id)
    write_export_options(Path(args.export_options_path), export_options)
    confirm_export_options(Path(args.export_options_path))
    return 0


def run_generate_command(args):
    """Entry point for the generate command from CLI"""
    return main(parsed_args=args)


if __name__ == "__main__":
    sys.exit(main())
