"""Tests for project generation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from jni_cli.models.coordinates import ArtifactCoordinates
from jni_cli.models.project import ScaffoldFile, ScaffoldStatus
from jni_cli.parsers.gradle_build import parse_publication
from jni_cli.scaffold import Scaffolder


class TestScaffolderPlan:
    """Test collecting files from plugins."""

    def test_bundled_files(self, tmp_path: Path):
        scaffolder = Scaffolder(output_dir=tmp_path / "kotlin")
        coords = ArtifactCoordinates(group_id="org.apache", package_name="commons-io")

        paths = [f.relative_path for f in scaffolder.plan(coords)]

        assert paths == sorted(
            [
                Path("build.gradle.kts"),
                Path("gradle.properties"),
                Path("gradle/wrapper/gradle-wrapper.properties"),
                Path("settings.gradle.kts"),
                Path("src/main/kotlin/org/apache/commons-io/Library.kt"),
            ]
        )

    def test_directories_include_binding_packages(self, crate_dir: Path):
        from jni_cli.parsers.java_class import discover_bindings

        scaffolder = Scaffolder(output_dir=crate_dir / "kotlin")
        coords = ArtifactCoordinates(group_id="org.apache", package_name="commons-io")

        dirs = scaffolder.directories(coords, discover_bindings(crate_dir / "src"))

        assert Path("src/main/kotlin/org/apache/commons-io") in dirs
        assert Path("src/main/resources") in dirs
        assert Path("src/main/kotlin/beep/boop") in dirs
        assert Path("src/main/kotlin/dev/gigapixel/tokenizers") in dirs


class TestScaffolderWrite:
    """Test writing files to disk."""

    def test_writes_text_bytes_and_executable(self, tmp_path: Path):
        scaffolder = Scaffolder(output_dir=tmp_path)
        files = [
            ScaffoldFile(relative_path=Path("a/b.txt"), content="hello\n"),
            ScaffoldFile(relative_path=Path("gradlew"), content=b"#!/bin/sh\n", executable=True),
        ]

        written = scaffolder.write(files, [Path("empty/dir")])

        assert written == [tmp_path / "a/b.txt", tmp_path / "gradlew"]
        assert (tmp_path / "a/b.txt").read_text() == "hello\n"
        assert (tmp_path / "gradlew").read_bytes() == b"#!/bin/sh\n"
        assert os.access(tmp_path / "gradlew", os.X_OK)
        assert (tmp_path / "empty/dir").is_dir()


class TestScaffolderRun:
    """Test the complete generation flow."""

    def test_generates_project(self, crate_dir: Path):
        output_dir = crate_dir / "kotlin"
        scaffolder = Scaffolder(output_dir=output_dir, project_root=crate_dir)

        result = scaffolder.run(
            group_id="com.example",
            package_name="mylib",
            manifest_path=crate_dir / "Cargo.toml",
            src_dir=crate_dir / "src",
        )

        assert result.status == ScaffoldStatus.SUCCESS
        assert result.error_message is None
        assert len(result.files_written) == 5
        assert {b.rust_type for b in result.bindings} == {"Tokenizer", "SomeStruct"}

        publication = parse_publication((output_dir / "build.gradle.kts").read_text())
        assert (publication.group_id, publication.artifact_id) == ("com.example", "mylib")

        settings = (output_dir / "settings.gradle.kts").read_text()
        assert 'rootProject.name = "mylib"' in settings

        library = (output_dir / "src/main/kotlin/com/example/mylib/Library.kt").read_text()
        assert "package com.example.mylib" in library
        assert "tokenizers_jni" in library

        assert (output_dir / "src/main/resources").is_dir()
        assert (output_dir / "src/main/kotlin/beep/boop").is_dir()

    def test_invalid_coordinates_write_nothing(self, tmp_path: Path):
        output_dir = tmp_path / "kotlin"
        result = Scaffolder(output_dir=output_dir).run(group_id="", package_name="mylib")

        assert result.status == ScaffoldStatus.FAILED
        assert "group_id must not be empty" in result.error_message
        assert not output_dir.exists()

    def test_missing_token_writes_nothing(self, tmp_path: Path):
        override = tmp_path / ".jni-cli" / "templates" / "gradle"
        override.mkdir(parents=True)
        (override / "gradle.properties").write_text("version={{ library_version }}\n")

        output_dir = tmp_path / "kotlin"
        result = Scaffolder(output_dir=output_dir, project_root=tmp_path).run(
            group_id="com.example", package_name="mylib"
        )

        assert result.status == ScaffoldStatus.FAILED
        assert "library_version" in result.error_message
        assert not output_dir.exists()

    def test_duplicate_binding_writes_nothing(self, crate_dir: Path):
        (crate_dir / "src" / "dup.rs").write_text('#[java_class("x.y")]\nimpl Tokenizer {}\n')
        output_dir = crate_dir / "kotlin"

        result = Scaffolder(output_dir=output_dir).run(
            group_id="com.example", package_name="mylib", src_dir=crate_dir / "src"
        )

        assert result.status == ScaffoldStatus.FAILED
        assert "struct_name Tokenizer" in result.error_message
        assert not output_dir.exists()

    def test_refuses_to_overwrite(self, tmp_path: Path):
        output_dir = tmp_path / "kotlin"
        output_dir.mkdir()
        (output_dir / "build.gradle.kts").write_text("// mine\n")

        result = Scaffolder(output_dir=output_dir).run(group_id="com.example", package_name="mylib")

        assert result.status == ScaffoldStatus.FAILED
        assert "--force" in result.error_message
        assert (output_dir / "build.gradle.kts").read_text() == "// mine\n"

    def test_force_overwrites(self, tmp_path: Path):
        output_dir = tmp_path / "kotlin"
        output_dir.mkdir()
        (output_dir / "build.gradle.kts").write_text("// mine\n")

        result = Scaffolder(output_dir=output_dir, force=True).run(
            group_id="com.example", package_name="mylib"
        )

        assert result.status == ScaffoldStatus.SUCCESS
        assert "// mine" not in (output_dir / "build.gradle.kts").read_text()

    def test_build_without_manifest_fails_early(self, tmp_path: Path):
        output_dir = tmp_path / "kotlin"
        result = Scaffolder(output_dir=output_dir).run(
            group_id="com.example",
            package_name="mylib",
            manifest_path=tmp_path / "Cargo.toml",
            build=True,
        )

        assert result.status == ScaffoldStatus.FAILED
        assert "Cannot build native library" in result.error_message
        assert not output_dir.exists()

    @patch("jni_cli.scaffold.copy_native_artifact")
    @patch("jni_cli.scaffold.build_native")
    def test_build_bundles_artifact(self, mock_build, mock_copy, crate_dir: Path):
        mock_copy.return_value = crate_dir / "kotlin/src/main/resources/libtokenizers_jni.so"

        result = Scaffolder(output_dir=crate_dir / "kotlin").run(
            group_id="com.example",
            package_name="mylib",
            manifest_path=crate_dir / "Cargo.toml",
            build=True,
            timeout=42,
        )

        assert result.status == ScaffoldStatus.SUCCESS
        assert result.native_artifact == mock_copy.return_value
        mock_build.assert_called_once_with(crate_dir, timeout=42)
        assert mock_copy.call_args.kwargs["lib_name"] == "tokenizers_jni"
        assert mock_copy.call_args.kwargs["target_dir"] == crate_dir / "target"

    @patch("jni_cli.scaffold.build_native", side_effect=RuntimeError("cargo build failed with exit code 101"))
    def test_build_failure_keeps_generated_files(self, mock_build, crate_dir: Path):
        output_dir = crate_dir / "kotlin"
        result = Scaffolder(output_dir=output_dir).run(
            group_id="com.example",
            package_name="mylib",
            manifest_path=crate_dir / "Cargo.toml",
            build=True,
        )

        assert result.status == ScaffoldStatus.FAILED
        assert result.error_message == "cargo build failed with exit code 101"
        assert (output_dir / "build.gradle.kts").exists()
        assert result.native_artifact is None


@pytest.mark.parametrize(
    "group,package",
    [("com.example", "mylib"), ("org.apache", "commons-io"), ("io.github.a-b", "x")],
)
def test_generated_build_script_round_trips(tmp_path: Path, group, package):
    output_dir = tmp_path / "kotlin"
    Scaffolder(output_dir=output_dir).run(group_id=group, package_name=package)

    publication = parse_publication((output_dir / "build.gradle.kts").read_text())
    assert publication.group_id == group
    assert publication.artifact_id == package
