from __future__ import annotations

import pytest

from conftest import write_build_output
from debugger_frontend_sync import installer
from debugger_frontend_sync.errors import ManifestError


def test_clean_package_files_given_existing_tree_when_cleaned_twice_then_absent_without_error(tmp_path) -> None:
    # Given
    dest = tmp_path / "dist" / "third-party"
    (dest / "front_end" / "core").mkdir(parents=True)
    (dest / "front_end" / "core" / "root.js").write_text("x", encoding="utf-8")

    # When
    installer.clean_package_files(dest)
    installer.clean_package_files(dest)

    # Then
    assert not dest.exists()


def test_copy_frontend_files_given_nested_manifest_when_copied_then_layout_and_contents_match(tmp_path) -> None:
    # Given
    build_path = tmp_path / "out" / "Release"
    files = {
        "inspector.html": "<html></html>",
        "front_end/entrypoints/rn_fusebox/rn_fusebox.js": "fusebox();",
        "front_end/core/i18n/locales/en-US.json": "{}",
        "front_end/third_party/a/b/c/d/deep.css": "body{}",
    }
    write_build_output(build_path, files)
    dest = tmp_path / "pkg" / "dist" / "third-party"

    # When
    copied = installer.copy_frontend_files_to_package(build_path, dest)

    # Then
    assert copied == [dest / relative for relative in files]
    on_disk = sorted(str(p.relative_to(dest)) for p in dest.rglob("*") if p.is_file())
    assert on_disk == sorted(files)
    for relative, content in files.items():
        assert (dest / relative).read_text(encoding="utf-8") == content


def test_copy_frontend_files_given_missing_manifest_when_copied_then_raises(tmp_path) -> None:
    # Given
    build_path = tmp_path / "out" / "Release"
    build_path.mkdir(parents=True)

    # When / Then
    with pytest.raises(FileNotFoundError):
        installer.copy_frontend_files_to_package(build_path, tmp_path / "dest")


def test_copy_frontend_files_given_missing_source_file_when_copied_then_raises(tmp_path) -> None:
    # Given
    build_path = tmp_path / "out" / "Release"
    write_build_output(build_path, {"present.js": "ok"})
    manifest = build_path / "gen" / installer.MANIFEST_NAME
    manifest.write_text('["present.js", "missing.js"]', encoding="utf-8")
    dest = tmp_path / "dest"

    # When
    with pytest.raises(FileNotFoundError):
        installer.copy_frontend_files_to_package(build_path, dest)

    # Then
    assert (dest / "present.js").exists()


@pytest.mark.parametrize(
    "manifest_text",
    ['{"files": []}', "[1, 2]", '["../escape.js"]', '["/etc/passwd"]', "not json"],
)
def test_read_manifest_given_invalid_manifest_when_read_then_raises_manifest_error(tmp_path, manifest_text) -> None:
    # Given
    manifest = tmp_path / installer.MANIFEST_NAME
    manifest.write_text(manifest_text, encoding="utf-8")

    # When / Then
    with pytest.raises(ManifestError):
        installer.read_manifest(manifest)


def test_copy_license_given_checkout_when_copied_then_license_in_destination(tmp_path, local_checkout) -> None:
    # Given
    dest = tmp_path / "dist" / "third-party"

    # When
    copied = installer.copy_license_to_package(local_checkout, dest)

    # Then
    assert copied == dest / "LICENSE"
    assert copied.read_text(encoding="utf-8") == "BSD-style license\n"


def test_copy_license_given_missing_license_when_copied_then_raises(tmp_path) -> None:
    # Given
    checkout_path = tmp_path / "no-license"
    checkout_path.mkdir()

    # When / Then
    with pytest.raises(FileNotFoundError):
        installer.copy_license_to_package(checkout_path, tmp_path / "dest")
