import plistlib
from pathlib import Path

import pytest
from asn1crypto import cms

from exportplist.src.profile.decoder import ProfileDecoder


class FakeDecoder(ProfileDecoder):
    """Returns a canned plist payload instead of calling security cms."""

    name = "fake"

    def __init__(self, payload: bytes):
        self.payload = payload
        self.calls = []

    def decode_payload(self, profile_path: Path) -> bytes:
        self.calls.append(profile_path)
        return self.payload


def make_profile_payload(**entries) -> bytes:
    profile = {
        "AppIDName": "Foo",
        "TeamIdentifier": ["ABCDE12345"],
        "DeveloperCertificates": [b"\x30\x82\x01\x00cert"],
        "Entitlements": {"com.apple.developer.team-identifier": "ABCDE12345"},
        "Version": 1,
    }
    profile.update(entries)
    return plistlib.dumps(profile)


def make_signed_profile(payload: bytes) -> bytes:
    """Wrap ``payload`` in an unsigned CMS SignedData container."""
    signed_data = cms.SignedData(
        {
            "version": "v1",
            "digest_algorithms": [],
            "encap_content_info": {"content_type": "data", "content": payload},
            "signer_infos": [],
        }
    )
    return cms.ContentInfo({"content_type": "signed_data", "content": signed_data}).dump()


def add_app(archive: Path, app_name: str, profile_bytes: bytes = b"profile") -> Path:
    contents = archive / "Products" / "Applications" / f"{app_name}.app" / "Contents"
    contents.mkdir(parents=True)
    profile = contents / "embedded.provisionprofile"
    profile.write_bytes(profile_bytes)
    return profile


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "Foo.xcarchive"
    path.mkdir()
    return path


@pytest.fixture
def archive_with_profile(archive):
    add_app(archive, "Foo")
    return archive


@pytest.fixture
def output_path(tmp_path):
    return tmp_path / "export_options.plist"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPORTPLIST_CONFIG", str(tmp_path / "missing-config.toml"))
    monkeypatch.delenv("EXPORTPLIST_DECODER", raising=False)


CUSTOM_EXPORT_OPTIONS = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>method</key>
    <string>enterprise</string>
    <key>signingStyle</key>
    <string>manual</string>
</dict>
</plist>
"""
