from pathlib import Path
from typing import Sequence

from rich.markup import escape

from exportplist.src.export.options_writer import (
    confirm_export_options,
    write_custom_export_options,
)


def write_custom_content(args, console, ignored: Sequence[str]) -> int:
    """Write ``--custom_export_options_plist_content`` in place of generated options.

    Returns the command's exit code: 1 when the content is not a dictionary plist.
    """
    console.print()
    console.print("[bold blue]==> Use custom export options[/]")
    console.print(
        "[yellow]Ignoring the following options because "
        "custom_export_options_plist_content provided:[/]"
    )
    for name in ignored:
        console.print(f"[yellow]  • {name}: {escape(str(getattr(args, name, None)))}[/]")

    path = Path(args.export_options_path)
    try:
        write_custom_export_options(path, args.custom_export_options_plist_content)
    except ValueError as e:
        console.print(
            f"[red]Invalid custom_export_options_plist_content: {escape(str(e))}[/]",
            soft_wrap=True,
        )
        return 1

    confirm_export_options(path)
    return 0
