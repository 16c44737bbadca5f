from pathlib import Path
from typing import List

from exportplist.logger import get_console
from exportplist.src.errors import ProfileNotFoundError

PROFILE_PATTERN = "Products/Applications/*.app/Contents/embedded.provisionprofile"


def find_profile_candidates(archive_path: Path) -> List[Path]:
    """List embedded profiles in the order the filesystem returns them.

    Hidden bundles (".Foo.app") are skipped, as a shell glob would.
    """
    return [
        p
        for p in Path(archive_path).glob(PROFILE_PATTERN)
        if p.is_file() and not p.parent.parent.name.startswith(".")
    ]


def locate_profile(archive_path: Path) -> Path:
    """Return the embedded provisioning profile of the archive's app bundle.

    Only one application bundle is expected. When several match, the first one
    in enumeration order wins, which is only as stable as the filesystem's
    directory ordering.
    """
    candidates = find_profile_candidates(archive_path)
    if not candidates:
        raise ProfileNotFoundError(
            f"no provisioning profile found in {Path(archive_path) / PROFILE_PATTERN}"
        )

    profile_path = candidates[0]
    if len(candidates) > 1:
        console = get_console()
        console.print(
            f"[yellow]Warning: {len(candidates)} provisioning profiles found, "
            f"using the first one[/]"
        )
        for candidate in candidates:
            console.print(f"  • {candidate}", markup=False)

    return profile_path
