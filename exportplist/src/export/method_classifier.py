from typing import Any, Dict

APP_STORE = "app-store"
DEVELOPMENT = "development"


def classify_export_method(profile: Dict[str, Any]) -> str:
    """Pick the export method for a decoded provisioning profile.

    Profiles that enumerate device UDIDs (development, ad-hoc) carry
    ``ProvisionedDevices``; App Store profiles don't. Ad-hoc and enterprise
    profiles are not told apart and both come out as ``development``.
    """
    if profile.get("ProvisionedDevices") is None:
        return APP_STORE
    return DEVELOPMENT
