from __future__ import annotations

import pytest

from conftest import REVISION_A
from debugger_frontend_sync import build_info
from debugger_frontend_sync.errors import BuildInfoError
from debugger_frontend_sync.models import BuildInfo
from debugger_frontend_sync.signing import get_signing_token, verify_signature


def test_render_build_info_given_remote_checkout_when_rendered_then_lines_are_in_order(remote_build_info) -> None:
    # Given
    info = remote_build_info

    # When
    text = build_info.render_build_info(info)

    # Then
    assert text.splitlines() == [
        get_signing_token(),
        f"Git revision: {REVISION_A}",
        "Built with --nohooks: false",
        "Is local checkout: false",
        "Remote URL: https://github.com/facebook/react-native-devtools-frontend",
        "Remote branch: chromium/7000",
        "GN build args (overrides only): ",
        "  is_official_build = true",
        "Git status in checkout:",
        "  <no changes>",
    ]
    assert text.endswith("\n")


def test_render_build_info_given_local_no_build_when_rendered_then_has_host_and_marker() -> None:
    # Given
    info = BuildInfo(
        git_revision=REVISION_A,
        is_local_checkout=True,
        nohooks=True,
        gn_args_summary="<not built>",
        git_status=" M front_end/core/sdk/Target.ts\n?? out/",
        hostname="devbox",
        user="alice",
        no_build=True,
    )

    # When
    lines = build_info.render_build_info(info).splitlines()

    # Then
    assert "Built with --nohooks: true" in lines
    assert "Hostname: devbox" in lines
    assert "User: alice" in lines
    assert not any(line.startswith("Remote URL:") for line in lines)
    assert "  M front_end/core/sdk/Target.ts" in lines
    assert "  ?? out/" in lines
    assert "  <not built>" in lines
    assert lines[-1] == build_info.NO_BUILD_MARKER


def test_build_info_given_short_revision_when_validated_then_rejected() -> None:
    # Given
    short_revision = "abc123"

    # When / Then
    with pytest.raises(ValueError):
        BuildInfo(git_revision=short_revision, is_local_checkout=True, gn_args_summary="")


def test_write_build_info_given_info_when_read_back_then_revision_round_trips(tmp_path, remote_build_info) -> None:
    # Given
    package_path = tmp_path / "debugger-frontend"

    # When
    path = build_info.write_build_info(package_path, remote_build_info)
    parsed = build_info.read_build_info(package_path)

    # Then
    assert path == package_path / "BUILD_INFO"
    assert parsed.git_revision == REVISION_A
    assert parsed.is_local_checkout is False
    assert verify_signature(path.read_text(encoding="utf-8")) is True


def test_write_build_info_given_later_edit_when_verified_then_signature_mismatch(tmp_path, remote_build_info) -> None:
    # Given
    path = build_info.write_build_info(tmp_path, remote_build_info)
    text = path.read_text(encoding="utf-8")

    # When
    path.write_text(text.replace("chromium/7000", "chromium/7001"), encoding="utf-8")

    # Then
    assert verify_signature(path.read_text(encoding="utf-8")) is False


def test_generate_build_info_given_checkout_when_generated_then_queries_git(tmp_path, git_responses) -> None:
    # Given
    git_responses["status"] = "M BUILD.gn"
    package_path = tmp_path / "pkg"

    # When
    path = build_info.generate_build_info(
        tmp_path,
        package_path,
        branch="main",
        is_local_checkout=False,
        nohooks=False,
        gn_args_summary="",
        no_build=False,
    )

    # Then
    text = path.read_text(encoding="utf-8")
    assert f"Git revision: {REVISION_A}" in text
    assert "  M BUILD.gn" in text
    assert "GN build args (overrides only): \n  <none>" in text


def test_parse_build_info_given_missing_revision_when_parsed_then_raises() -> None:
    # Given
    text = "Git revision: not-a-hash\nIs local checkout: false\n"

    # When / Then
    with pytest.raises(BuildInfoError, match="Could not extract git revision"):
        build_info.parse_build_info(text)


def test_parse_build_info_given_no_checkout_line_when_parsed_then_treated_as_local() -> None:
    # Given
    text = f"Git revision: {REVISION_A}\n"

    # When
    parsed = build_info.parse_build_info(text)

    # Then
    assert parsed.is_local_checkout is True


def test_read_build_info_given_missing_file_when_read_then_raises(tmp_path) -> None:
    # Given
    package_path = tmp_path / "empty"

    # When / Then
    with pytest.raises(BuildInfoError, match="BUILD_INFO not found"):
        build_info.read_build_info(package_path)
