"""Building the Rust crate and bundling its native library."""

import shutil
import subprocess
import sys
import time
from pathlib import Path

from jni_cli.config import BUILD_TIMEOUT_SECONDS, CARGO_PROFILE
from jni_cli.logging_config import get_logger

logger = get_logger(__name__)


def native_library_filename(lib_name: str, platform: str | None = None) -> str:
    """Return the filename cargo gives a cdylib on the given platform.

    Args:
        lib_name: Library target name (e.g., 'tokenizers')
        platform: sys.platform value (defaults to the running platform)

    Returns:
        Filename such as 'libtokenizers.so', 'libtokenizers.dylib' or 'tokenizers.dll'
    """
    platform = platform or sys.platform

    if platform.startswith("win"):
        return f"{lib_name}.dll"
    if platform == "darwin":
        return f"lib{lib_name}.dylib"
    return f"lib{lib_name}.so"


def build_native(crate_dir: Path, timeout: int = BUILD_TIMEOUT_SECONDS) -> None:
    """Run cargo build --release in crate_dir.

    Raises:
        FileNotFoundError: If cargo is not installed
        RuntimeError: If the build fails or times out
    """
    cargo = shutil.which("cargo")
    if cargo is None:
        raise FileNotFoundError("cargo not found on PATH")

    start_time = time.time()
    try:
        result = subprocess.run(
            [cargo, "build", f"--{CARGO_PROFILE}"],
            cwd=crate_dir,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(f"cargo build timed out after {timeout} seconds") from e

    duration = time.time() - start_time
    logger.debug(f"cargo build finished in {duration:.1f}s with exit code {result.returncode}")

    if result.returncode != 0:
        logger.debug(result.stderr)
        raise RuntimeError(f"cargo build failed with exit code {result.returncode}")


def copy_native_artifact(
    target_dir: Path, lib_name: str, resources_dir: Path, platform: str | None = None
) -> Path:
    """Copy the built native library into the project's resources.

    Args:
        target_dir: Cargo target directory (e.g., crate/target)
        lib_name: Library target name
        resources_dir: src/main/resources of the generated project
        platform: sys.platform value (defaults to the running platform)

    Returns:
        Path of the copied artifact

    Raises:
        FileNotFoundError: If the artifact was not produced
    """
    filename = native_library_filename(lib_name, platform)
    artifact = target_dir / CARGO_PROFILE / filename
    if not artifact.exists():
        raise FileNotFoundError(f"Native artifact not found: {artifact}")

    resources_dir.mkdir(parents=True, exist_ok=True)
    destination = resources_dir / filename
    shutil.copy2(artifact, destination)
    logger.info(f"Bundled native library: {destination}")
    return destination
