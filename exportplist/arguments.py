import argparse
from typing import Optional

from rich.markup import escape
from rich_argparse import RawDescriptionRichHelpFormatter

REQUIRED_OPTIONS = ("export_options_path", "archive_path")


def create_parser(prog: str, description: str, with_export_method: bool):
    """Create and return an argument parser with export arguments."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=RawDescriptionRichHelpFormatter,
    )
    add_export_arguments(parser, with_export_method=with_export_method)
    return parser


def add_export_arguments(parser, with_export_method: bool = True):
    """Add the export options arguments to an existing parser."""
    # Checked after parsing so a missing value exits 1 with our own message
    parser.add_argument(
        "-o",
        "--export_options_path",
        metavar="path",
        help="Path of the export options plist to write",
    )

    parser.add_argument(
        "-a",
        "--archive_path",
        metavar="path",
        help="Path of the .xcarchive to export",
    )

    if with_export_method:
        parser.add_argument(
            "-e",
            "--export_method",
            metavar="method",
            help="Export method written as-is, e.g. app-store, ad-hoc, development",
        )

    parser.add_argument(
        "-t",
        "--team_id",
        metavar="id",
        help="Developer team identifier to add as teamID [default: omitted]",
    )

    parser.add_argument(
        "--custom_export_options_plist_content",
        metavar="content",
        help="Full export options plist to write as-is; other export options "
        "are ignored when set",
    )


def normalize_args(args) -> argparse.Namespace:
    """Treat empty-string values as not provided."""
    for key, value in vars(args).items():
        if isinstance(value, str) and value == "":
            setattr(args, key, None)
    return args


def validate_required(args, console) -> bool:
    """Echo required options, stopping at the first missing one."""
    for name in REQUIRED_OPTIONS:
        value: Optional[str] = getattr(args, name, None)
        if not value:
            console.print(f"[red]{name} not specified[/]")
            return False
        console.print(f"(i) {name}: {escape(value)}", soft_wrap=True)
    return True
