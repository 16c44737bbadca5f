import json
import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape

from exportplist.arguments import create_parser, normalize_args, validate_required
from exportplist.commands.custom_options import write_custom_content
from exportplist.logger import get_console
from exportplist.src.archive.profile_locator import locate_profile
from exportplist.src.errors import ProfileNotFoundError
from exportplist.src.export.method_classifier import classify_export_method
from exportplist.src.export.options_writer import (
    build_export_options,
    confirm_export_options,
    write_export_options,
)
from exportplist.src.profile.decoder import ProfileDecoder, decode_profile, get_decoder
from exportplist.src.utils.config_loader import get_decoder_backend


def print_profile_contents(console, profile: dict) -> None:
    """Print the decoded profile, certificates already stripped."""
    console.print("\n[bold]Provisioning Profile Contents:[/bold]")
    console.print_json(json.dumps(profile, default=str))


def main(argv=None, parsed_args=None, decoder: Optional[ProfileDecoder] = None) -> int:
    """Write export options with the method read from the archive's profile.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:])
        parsed_args: Optional pre-parsed arguments (from CLI)
        decoder: Profile decoder to use instead of the configured backend
    """
    console = get_console()

    if parsed_args is None:
        parser = create_parser(
            prog="detect-export-options",
            description="Generate an export options plist, deriving the export "
            "method from the archive's embedded provisioning profile.",
            with_export_method=False,
        )
        args = parser.parse_args(argv)
    else:
        args = parsed_args
    normalize_args(args)

    console.print()
    if not validate_required(args, console):
        return 1

    # The profile only decides the method, which custom content replaces
    if args.custom_export_options_plist_content is not None:
        return write_custom_content(args, console, ("team_id",))

    try:
        profile_path = locate_profile(Path(args.archive_path))
    except ProfileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/]", soft_wrap=True)
        return 1
    console.print(f"(i) provisioning profile: {escape(str(profile_path))}", soft_wrap=True)

    if decoder is None:
        decoder = get_decoder(get_decoder_backend())
    console.print(f"[blue]Decoding profile with:[/] {decoder.name}")

    # Decoder and plist errors are fatal and propagate as-is
    profile = decode_profile(profile_path, decoder)
    print_profile_contents(console, profile)

    method = classify_export_method(profile)
    console.print(f"\n(i) export_method: [cyan]{method}[/]")

    console.print()
    console.print("[bold blue]==> Create export options[/]")
    export_options = build_export_options(method, team_id=args.team_id)
    write_export_options(Path(args.export_options_path), export_options)
    confirm_export_options(Path(args.export_options_path))
    return 0


def run_detect_command(args):
    """Entry point for the detect command from CLI"""
    return main(parsed_args=args)


if __name__ == "__main__":
    sys.exit(main())
