class ProfileNotFoundError(Exception):
    """No embedded provisioning profile exists under the archive."""


class ProfileFormatError(Exception):
    """The decoded provisioning profile is not a dictionary plist."""
