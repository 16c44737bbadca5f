import plistlib
from pathlib import Path
from typing import Any, Dict, Optional
from xml.parsers.expat import ExpatError

from rich.markup import escape

from exportplist.logger import get_console


def build_export_options(
    method: Optional[str], team_id: Optional[str] = None
) -> Dict[str, Any]:
    """Assemble the export options mapping, skipping unset values."""
    export_options = {}
    if method is not None:
        export_options["method"] = method
    if team_id is not None:
        export_options["teamID"] = team_id
    return export_options


def serialize_export_options(export_options: Dict[str, Any]) -> str:
    return plistlib.dumps(export_options, fmt=plistlib.FMT_XML).decode("utf-8")


def parse_custom_export_options(plist_content: str) -> Dict[str, Any]:
    """Parse user supplied plist content, which must hold a dictionary.

    Raises ``ValueError`` (``plistlib.InvalidFileException`` included) when
    the content is not a dictionary plist.
    """
    try:
        export_options = plistlib.loads(plist_content.encode("utf-8"))
    except ExpatError as e:
        raise ValueError(f"malformed plist XML: {e}")
    if not isinstance(export_options, dict):
        raise ValueError("custom export options must be a dictionary plist")
    return export_options


def _save_plist_content(
    path: Path, export_options: Dict[str, Any], plist_content: str
) -> str:
    console = get_console()

    console.print()
    console.print(f" (i) export_options: {escape(repr(export_options))}")
    console.print(" (i) plist_content:")
    console.print(plist_content, markup=False, highlight=False, soft_wrap=True)
    console.print(f" (i) saving into file: {escape(str(path))}", soft_wrap=True)

    path.write_text(plist_content, encoding="utf-8")
    return plist_content


def write_export_options(path: Path, export_options: Dict[str, Any]) -> str:
    """Serialize ``export_options`` and write it to ``path``.

    An existing file is overwritten in place. The write is not atomic.
    """
    plist_content = serialize_export_options(export_options)
    return _save_plist_content(Path(path), export_options, plist_content)


def write_custom_export_options(path: Path, plist_content: str) -> str:
    """Write user supplied plist content verbatim after checking it parses."""
    export_options = parse_custom_export_options(plist_content)
    return _save_plist_content(Path(path), export_options, plist_content)


def read_export_options(path: Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return plistlib.load(f)


def confirm_export_options(path: Path) -> Dict[str, Any]:
    """Read the written file back and report the method it holds."""
    console = get_console()
    export_options = read_export_options(path)
    method = export_options.get("method")
    console.print(
        f"[green]✓ Export options saved to:[/] {escape(str(path))} "
        f"(method: {escape(str(method)) if method is not None else 'unset'})",
        soft_wrap=True,
    )
    return export_options
