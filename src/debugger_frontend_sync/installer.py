"""Copy manifest-declared build outputs into the debugger-frontend package."""

from __future__ import annotations

import json
import os
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path, PurePosixPath

import typer

from debugger_frontend_sync.errors import ManifestError

MANIFEST_NAME = "input_grd_files.json"
MAX_COPY_WORKERS = min(32, (os.cpu_count() or 1) + 4)


def remove_path(path: Path) -> None:
    """Remove a file or directory tree; a missing path is not an error."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def clean_package_files(dest_path_in_package: Path) -> None:
    typer.echo("Cleaning stale generated files in debugger-frontend")
    remove_path(dest_path_in_package)
    typer.echo()


def read_manifest(manifest_path: Path) -> list[str]:
    """Load the list of relative file paths the build marks for packaging."""
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest is not valid JSON: {manifest_path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ManifestError(f"Manifest must be a JSON array of paths: {manifest_path}")
    for item in data:
        relative = PurePosixPath(item)
        if relative.is_absolute() or ".." in relative.parts:
            raise ManifestError(f"Manifest entry escapes the build directory: {item}")
    return data


def _copy_one(source_root: Path, dest_root: Path, relative: str) -> Path:
    dest_path = dest_root / relative
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source_root / relative, dest_path)
    return dest_path


def copy_frontend_files_to_package(build_path: Path, dest_path_in_package: Path) -> list[Path]:
    """Copy every manifest entry from ``<build>/gen`` into the package.

    Copies run concurrently. All copies settle before the first failure,
    if any, is re-raised; files already copied are left in place.

    Returns:
        Destination paths of the copied files, in manifest order.
    """
    typer.echo("Copying built devtools-frontend files to debugger-frontend\n")
    gen_path = build_path / "gen"
    files = read_manifest(gen_path / MANIFEST_NAME)

    copied: dict[str, Path] = {}
    first_error: BaseException | None = None
    with ThreadPoolExecutor(max_workers=MAX_COPY_WORKERS) as ex:
        futures = {ex.submit(_copy_one, gen_path, dest_path_in_package, f): f for f in files}
        for fut in as_completed(futures):
            try:
                copied[futures[fut]] = fut.result()
            except OSError as exc:
                if first_error is None:
                    first_error = exc
    if first_error is not None:
        raise first_error
    return [copied[f] for f in files]


def copy_license_to_package(checkout_path: Path, dest_path_in_package: Path) -> Path:
    typer.echo("Copying LICENSE from devtools-frontend to debugger-frontend package\n")
    dest_path_in_package.mkdir(parents=True, exist_ok=True)
    dest = dest_path_in_package / "LICENSE"
    shutil.copyfile(checkout_path / "LICENSE", dest)
    return dest
