"""jni-cli: Scaffold a Kotlin/Gradle project around a Rust JNI crate."""

import pluggy

from jni_cli.config import __version__
from jni_cli.logging_config import get_logger

# Convenience export for plugins: from jni_cli import hookimpl
hookimpl = pluggy.HookimplMarker("jni_cli")

__all__ = [
    "__version__",
    "hookimpl",
    "get_logger",
]
