from rich.text import Text

__version__ = "0.2.0"

APP_DESCRIPTION = "Generate xcodebuild export options from an .xcarchive"

# Export methods xcodebuild -exportArchive accepts, old and new spellings.
KNOWN_EXPORT_METHODS = (
    "app-store",
    "app-store-connect",
    "ad-hoc",
    "release-testing",
    "enterprise",
    "development",
    "debugging",
    "developer-id",
    "mac-application",
    "package",
    "validation",
)


def get_banner_text() -> Text:
    banner = Text()
    banner.append("export", style="bold cyan")
    banner.append("plist", style="bold magenta")
    return banner
