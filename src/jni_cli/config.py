"""Configuration constants for jni-cli."""

from pathlib import Path

# Version
__version__ = "0.1.0"

# Directory paths (relative to the current working directory)
DEFAULT_OUTPUT_DIR = Path("kotlin")
"""Directory the Kotlin/Gradle project is generated into"""

DEFAULT_SOURCE_DIR = Path("src")
"""Rust sources scanned for #[java_class] bindings"""

DEFAULT_MANIFEST = Path("Cargo.toml")
"""Cargo manifest of the crate being wrapped"""

TEMPLATE_OVERRIDE_DIR = Path(".jni-cli") / "templates"
"""Per-project template overrides, checked before packaged templates"""

# Environment variables
GROUP_ENVVAR = "JNI_CLI_GROUP"
PACKAGE_ENVVAR = "JNI_CLI_PACKAGE"

# Cargo metadata table holding per-crate defaults
CARGO_METADATA_KEY = "jni-cli"

# Native build settings
BUILD_TIMEOUT_SECONDS = 600
"""Timeout for cargo build --release (10 minutes)"""

CARGO_PROFILE = "release"

# Template settings
BUILD_SCRIPT_TEMPLATE = "gradle/build.gradle.kts"
"""Template path of the Gradle build script, relative to the templates package"""

GRADLE_VERSION = "8.3"
"""Gradle distribution pinned in gradle-wrapper.properties"""
