"""Kotlin plugin: top-level Library object that loads the native library."""

from jinja2 import Environment

from jni_cli import hookimpl
from jni_cli.models.coordinates import ArtifactCoordinates
from jni_cli.models.project import RustCrate
from jni_cli.native import native_library_filename
from jni_cli.rendering import render_template


@hookimpl
def scaffold_files(
    coords: ArtifactCoordinates, crate: RustCrate | None, env: Environment
) -> list[dict]:
    """Render Library.kt into the project root package."""
    lib_name = crate.lib_name if crate else coords.package_name.replace("-", "_")
    context = {
        **coords.to_context(),
        "native_library": native_library_filename(lib_name),
    }

    return [
        {
            "path": f"src/main/kotlin/{coords.group_path}/{coords.package_name}/Library.kt",
            "content": render_template("kotlin/Library.kt", context, env),
        },
    ]
