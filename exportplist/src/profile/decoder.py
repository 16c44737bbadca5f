"""Provisioning profile decoding.

An ``embedded.provisionprofile`` is a CMS (PKCS#7) ``SignedData`` container
whose encapsulated content is an XML plist. The container is opened by a
``ProfileDecoder``; the plist payload is then parsed and flattened here.
"""

import plistlib
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from asn1crypto.cms import ContentInfo

from exportplist.src.errors import ProfileFormatError

STRIPPED_KEYS = ("DeveloperCertificates",)


class ProfileDecoder(ABC):
    """Turns a signed profile file into its plaintext plist payload."""

    name = "base"

    @abstractmethod
    def decode_payload(self, profile_path: Path) -> bytes:
        ...


class SecurityCmsDecoder(ProfileDecoder):
    """Decode with macOS ``security cms``.

    The call blocks until the tool exits; no timeout is applied.
    """

    name = "security"

    def __init__(self, security_bin: str = "security"):
        self.security_bin = security_bin

    def decode_payload(self, profile_path: Path) -> bytes:
        result = subprocess.run(
            [self.security_bin, "cms", "-D", "-i", str(profile_path)],
            capture_output=True,
            check=True,
        )
        return result.stdout


class Asn1CmsDecoder(ProfileDecoder):
    """Read a provisioning profile without using macOS security command"""

    name = "asn1"

    def decode_payload(self, profile_path: Path) -> bytes:
        with open(profile_path, "rb") as f:
            content_info = ContentInfo.load(f.read())
        signed_data = content_info["content"]
        # The plist is the encapsulated content of the SignedData
        payload = signed_data["encap_content_info"]["content"].native
        if payload is None:
            raise ProfileFormatError(f"{profile_path} has no embedded content")
        return payload


DECODERS = {
    SecurityCmsDecoder.name: SecurityCmsDecoder,
    Asn1CmsDecoder.name: Asn1CmsDecoder,
}


def get_decoder(name: Optional[str] = None) -> ProfileDecoder:
    """Instantiate a decoder by backend name, ``security`` when unset."""
    backend = (name or SecurityCmsDecoder.name).strip().lower()
    try:
        return DECODERS[backend]()
    except KeyError:
        raise ValueError(
            f"Unknown profile decoder '{name}', expected one of: {', '.join(DECODERS)}"
        )


def normalize_profile(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Drop certificate blobs and stringify every non-container value."""
    profile = {}
    for key, value in raw.items():
        if key in STRIPPED_KEYS:
            continue
        if isinstance(value, (dict, list)):
            profile[key] = value
        else:
            profile[key] = str(value)
    return profile


def decode_profile(profile_path: Path, decoder: ProfileDecoder) -> Dict[str, Any]:
    """Decode ``profile_path`` into a mapping without ``DeveloperCertificates``.

    Decoder failures and malformed plists are not caught here.
    """
    payload = decoder.decode_payload(Path(profile_path))
    raw = plistlib.loads(payload)
    if not isinstance(raw, dict):
        raise ProfileFormatError(
            f"Provisioning profile {profile_path} does not contain a dictionary"
        )
    return normalize_profile(raw)
