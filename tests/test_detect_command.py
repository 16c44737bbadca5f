import plistlib
import subprocess

import pytest

from conftest import (
    CUSTOM_EXPORT_OPTIONS,
    FakeDecoder,
    add_app,
    make_profile_payload,
    make_signed_profile,
)
from exportplist.commands.detect import main
from exportplist.src.export.options_writer import read_export_options
from exportplist.src.profile import decoder as decoder_mod


def run(output_path, archive, decoder):
    return main(["-o", str(output_path), "-a", str(archive)], decoder=decoder)


def test_profile_without_devices_exports_app_store(archive_with_profile, output_path):
    fake = FakeDecoder(make_profile_payload())
    assert run(output_path, archive_with_profile, fake) == 0
    assert read_export_options(output_path) == {"method": "app-store"}


def test_profile_with_devices_exports_development(archive_with_profile, output_path):
    fake = FakeDecoder(make_profile_payload(ProvisionedDevices=["UDID1"]))
    assert run(output_path, archive_with_profile, fake) == 0
    assert read_export_options(output_path) == {"method": "development"}


def test_decoder_gets_located_profile(archive, output_path):
    profile = add_app(archive, "Foo")
    fake = FakeDecoder(make_profile_payload())
    run(output_path, archive, fake)
    assert fake.calls == [profile]


def test_certificates_are_not_printed(archive_with_profile, output_path, capsys):
    fake = FakeDecoder(make_profile_payload())
    run(output_path, archive_with_profile, fake)
    out = capsys.readouterr().out
    assert "DeveloperCertificates" not in out
    assert "AppIDName" in out


def test_missing_profile_fails_without_output(archive, output_path, capsys):
    fake = FakeDecoder(make_profile_payload())
    assert run(output_path, archive, fake) == 1
    assert "no provisioning profile found" in capsys.readouterr().out
    assert not output_path.exists()
    assert fake.calls == []


def test_missing_archive_path_fails(output_path, capsys):
    fake = FakeDecoder(make_profile_payload())
    assert main(["-o", str(output_path)], decoder=fake) == 1
    assert "archive_path not specified" in capsys.readouterr().out
    assert not output_path.exists()


def test_missing_export_options_path_fails(archive_with_profile, capsys):
    fake = FakeDecoder(make_profile_payload())
    assert main(["-a", str(archive_with_profile)], decoder=fake) == 1
    assert "export_options_path not specified" in capsys.readouterr().out


def test_export_method_flag_is_not_accepted(archive_with_profile, output_path):
    with pytest.raises(SystemExit) as exc:
        main(["-o", str(output_path), "-a", str(archive_with_profile), "-e", "ad-hoc"])
    assert exc.value.code != 0


def test_decode_failure_propagates(archive_with_profile, output_path, monkeypatch):
    def fake_run(cmd, capture_output, check):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(decoder_mod.subprocess, "run", fake_run)
    with pytest.raises(subprocess.CalledProcessError):
        main(["-o", str(output_path), "-a", str(archive_with_profile)])
    assert not output_path.exists()


def test_malformed_profile_propagates(archive_with_profile, output_path):
    with pytest.raises(plistlib.InvalidFileException):
        run(output_path, archive_with_profile, FakeDecoder(b"garbage"))
    assert not output_path.exists()


def test_backend_selected_from_environment(archive, output_path, monkeypatch):
    payload = make_profile_payload(ProvisionedDevices=["UDID1"])
    add_app(archive, "Foo", make_signed_profile(payload))
    monkeypatch.setenv("EXPORTPLIST_DECODER", "asn1")

    assert main(["-o", str(output_path), "-a", str(archive)]) == 0
    assert read_export_options(output_path) == {"method": "development"}


def test_team_id_is_added(archive_with_profile, output_path):
    fake = FakeDecoder(make_profile_payload())
    main(
        ["-o", str(output_path), "-a", str(archive_with_profile), "-t", "ABCDE12345"],
        decoder=fake,
    )
    assert read_export_options(output_path) == {
        "method": "app-store",
        "teamID": "ABCDE12345",
    }


def test_custom_content_skips_profile_lookup(archive, output_path):
    fake = FakeDecoder(make_profile_payload(ProvisionedDevices=["UDID1"]))
    code = main(
        [
            "-o",
            str(output_path),
            "-a",
            str(archive),
            "--custom_export_options_plist_content",
            CUSTOM_EXPORT_OPTIONS,
        ],
        decoder=fake,
    )
    assert code == 0
    assert fake.calls == []
    assert output_path.read_text() == CUSTOM_EXPORT_OPTIONS


def test_non_dictionary_custom_content_fails(archive_with_profile, output_path):
    content = plistlib.dumps(["method", "app-store"]).decode("utf-8")
    code = main(
        [
            "-o",
            str(output_path),
            "-a",
            str(archive_with_profile),
            "--custom_export_options_plist_content",
            content,
        ],
        decoder=FakeDecoder(make_profile_payload()),
    )
    assert code == 1
    assert not output_path.exists()


def test_detected_method_is_confirmed(archive_with_profile, output_path, capsys):
    fake = FakeDecoder(make_profile_payload(ProvisionedDevices=["UDID1"]))
    run(output_path, archive_with_profile, fake)
    assert "(method: development)" in capsys.readouterr().out
