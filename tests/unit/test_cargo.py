"""Tests for Cargo.toml parsing."""

from pathlib import Path

import pytest

from jni_cli.parsers.cargo import crate_defaults, read_crate


class TestReadCrate:
    """Test reading the root package."""

    def test_lib_name_defaults_to_package_name(self, crate_dir: Path):
        crate = read_crate(crate_dir / "Cargo.toml")
        assert crate.name == "tokenizers-jni"
        assert crate.lib_name == "tokenizers_jni"
        assert crate.crate_dir == crate_dir

    def test_explicit_lib_name(self, tmp_path: Path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text('[package]\nname = "a"\n\n[lib]\nname = "native_a"\n')
        assert read_crate(manifest).lib_name == "native_a"

    def test_missing_manifest(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_crate(tmp_path / "Cargo.toml")

    def test_workspace_without_package(self, tmp_path: Path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text('[workspace]\nmembers = ["a"]\n')
        with pytest.raises(ValueError, match="No package found"):
            read_crate(manifest)

    def test_invalid_toml(self, tmp_path: Path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[package\n")
        with pytest.raises(ValueError, match="Failed to parse"):
            read_crate(manifest)


class TestCrateDefaults:
    """Test [package.metadata.jni-cli] defaults."""

    def test_reads_metadata(self, tmp_path: Path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text(
            '[package]\nname = "a"\n\n[package.metadata.jni-cli]\ngroup = "org.apache"\npackage = "commons-io"\n'
        )
        assert crate_defaults(manifest) == {"group": "org.apache", "package": "commons-io"}

    def test_no_metadata(self, crate_dir: Path):
        assert crate_defaults(crate_dir / "Cargo.toml") == {}

    def test_no_manifest(self, tmp_path: Path):
        assert crate_defaults(tmp_path / "Cargo.toml") == {}
