"""Cargo.toml parsing for the crate being wrapped."""

from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from jni_cli.config import CARGO_METADATA_KEY
from jni_cli.models.project import RustCrate


def _load_manifest(manifest_path: Path) -> dict:
    if not manifest_path.exists():
        raise FileNotFoundError(f"Cargo manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            return tomlkit.load(f).unwrap()
    except ParseError as e:
        raise ValueError(f"Failed to parse {manifest_path}: {e}") from e


def read_crate(manifest_path: Path) -> RustCrate:
    """Read the root package of a Cargo manifest.

    Args:
        manifest_path: Path to Cargo.toml

    Returns:
        RustCrate with package and library names

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest has no [package] table
    """
    manifest = _load_manifest(manifest_path)

    package = manifest.get("package")
    if not package or not package.get("name"):
        raise ValueError(f"No package found in {manifest_path}")

    name = package["name"]
    lib_name = manifest.get("lib", {}).get("name") or name.replace("-", "_")

    return RustCrate(name=name, lib_name=lib_name, manifest_path=manifest_path)


def crate_defaults(manifest_path: Path) -> dict[str, str]:
    """Read [package.metadata.jni-cli] defaults (e.g. group, package).

    Returns an empty dict when the manifest or the table is absent.
    """
    if not manifest_path.exists():
        return {}

    manifest = _load_manifest(manifest_path)
    metadata = manifest.get("package", {}).get("metadata", {}).get(CARGO_METADATA_KEY, {})
    return {key: str(value) for key, value in metadata.items()}
