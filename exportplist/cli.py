import argparse
import sys
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback
from rich_argparse import RichHelpFormatter
from exportplist.arguments import add_export_arguments
from exportplist.src.constants.cli_constants import (
    __version__,
    get_banner_text,
    APP_DESCRIPTION,
)


class ExportPlistHelpFormatter(RichHelpFormatter):
    """Custom formatter for the exportplist CLI with rich styling."""

    def __init__(self, prog):
        super().__init__(prog, max_help_position=30, width=100)
        self.console = Console(
            theme=Theme(
                {
                    "command": "bold cyan",
                    "argument": "green",
                    "option": "yellow",
                    "version": "blue",
                    "title": "bold magenta",
                }
            )
        )

    def start_section(self, heading):
        # Make section headings more prominent
        heading_text = Text(heading, style="title")
        super().start_section(str(heading_text))


def display_banner():
    """Display the exportplist banner."""
    console = Console()
    banner = get_banner_text()

    version_info = Text(f"v{__version__}", style="version")
    tagline = Text(APP_DESCRIPTION, style="italic")

    panel = Panel.fit(
        Text.assemble(banner, "\n", tagline, "\n", version_info),
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)


def setup_environment():
    """Load .env values and pretty-print uncaught errors."""
    load_dotenv()
    install_rich_traceback(show_locals=False)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="exportplist",
        description=f"exportplist: {APP_DESCRIPTION}",
        formatter_class=ExportPlistHelpFormatter,
        add_help=True,
    )

    parser.add_argument(
        "--version", action="version", version=f"exportplist {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Write export options with an explicit export method",
        formatter_class=ExportPlistHelpFormatter,
        description="Write an export options plist using the method given with -e.",
    )
    add_export_arguments(generate_parser, with_export_method=True)

    # Detect command
    detect_parser = subparsers.add_parser(
        "detect",
        help="Write export options, reading the method from the provisioning profile",
        formatter_class=ExportPlistHelpFormatter,
        description="Write an export options plist. The export method is app-store "
        "unless the archive's provisioning profile lists devices.",
    )
    add_export_arguments(detect_parser, with_export_method=False)

    return parser


def main(argv=None):
    args_list = sys.argv[1:] if argv is None else argv

    # Display the banner before the help text
    if not args_list or args_list in (["-h"], ["--help"]):
        display_banner()

    setup_environment()
    parser = build_parser()
    args = parser.parse_args(args_list)

    if args.command == "generate":
        from exportplist.commands.generate import run_generate_command

        return run_generate_command(args)
    elif args.command == "detect":
        from exportplist.commands.detect import run_detect_command

        return run_detect_command(args)
    else:
        parser.print_help()
        return 1


def generate_main():
    """Console script for the explicit-method variant."""
    from exportplist.commands.generate import main as generate

    setup_environment()
    return generate()


def detect_main():
    """Console script for the profile-driven variant."""
    from exportplist.commands.detect import main as detect

    setup_environment()
    return detect()


if __name__ == "__main__":
    sys.exit(main())
