"""Hook specifications for jni-cli plugins.

This module defines the hooks that plugins can implement to contribute
files to the generated Kotlin/Gradle project. Plugins use the @hookimpl
decorator to implement these hooks.

Example plugin implementation:

    from jni_cli import hookimpl

    @hookimpl
    def scaffold_files(coords):
        return [
            {"path": "README.md", "content": f"# {coords.package_name}\\n"},
        ]
"""

import pluggy
from jinja2 import Environment

from jni_cli.models.coordinates import ArtifactCoordinates
from jni_cli.models.project import JavaClassBinding, RustCrate

hookspec = pluggy.HookspecMarker("jni_cli")


class ScaffoldSpec:
    """Hook specifications for scaffold plugins.

    Each hook uses Pluggy's dependency injection - plugins only need to
    declare the parameters they actually use.
    """

    @hookspec
    def scaffold_files(
        self,
        coords: ArtifactCoordinates,
        crate: RustCrate | None,
        bindings: list[JavaClassBinding],
        env: Environment,
    ) -> list[dict] | None:
        """Contribute files to the generated project.

        Called once per scaffold run, before anything is written. Rendering
        errors raised here abort the run with no files on disk.

        Args:
            coords: Validated group and package identifiers
            crate: Rust crate read from Cargo.toml, or None if there is none
            bindings: #[java_class] bindings discovered in the crate sources
            env: Jinja2 environment (project overrides before packaged templates)

        Returns:
            List of dicts with file info:
                - path: Path relative to the output directory (required)
                - content: Rendered text or bytes (required)
                - executable: Whether to mark the file executable
            None if this plugin contributes nothing.
        """
