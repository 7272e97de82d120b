"""Generation of the Kotlin/Gradle project around a Rust crate."""

import time
from pathlib import Path

from jinja2 import TemplateError

from jni_cli.config import BUILD_TIMEOUT_SECONDS
from jni_cli.logging_config import get_logger
from jni_cli.models.coordinates import ArtifactCoordinates
from jni_cli.models.project import (
    JavaClassBinding,
    RustCrate,
    ScaffoldFile,
    ScaffoldResult,
    ScaffoldStatus,
)
from jni_cli.native import build_native, copy_native_artifact
from jni_cli.parsers.cargo import read_crate
from jni_cli.parsers.java_class import discover_bindings
from jni_cli.rendering import build_template_environment

logger = get_logger(__name__)

BUILD_SCRIPT = Path("build.gradle.kts")
RESOURCES_DIR = Path("src/main/resources")


class Scaffolder:
    """Renders every project file in memory, then writes them in one pass.

    Nothing is written unless all files rendered successfully, so a missing
    token or an invalid identifier never leaves a partial project behind.
    """

    def __init__(self, output_dir: Path, project_root: Path | None = None, force: bool = False):
        """Initialize scaffolder.

        Args:
            output_dir: Directory the project is generated into
            project_root: Directory searched for .jni-cli/templates overrides
            force: Overwrite an existing build script
        """
        self.output_dir = output_dir
        self.force = force
        self.env = build_template_environment(project_root)

    def plan(
        self,
        coords: ArtifactCoordinates,
        crate: RustCrate | None = None,
        bindings: list[JavaClassBinding] | None = None,
    ) -> list[ScaffoldFile]:
        """Collect and render the files contributed by all plugins.

        Raises:
            ValueError: If a plugin returns an unsafe or duplicate path
            TemplateTokenError: If a template is missing a value
        """
        from jni_cli.plugins import initialize_plugins, pm

        initialize_plugins()

        results = pm.hook.scaffold_files(
            coords=coords, crate=crate, bindings=bindings or [], env=self.env
        )

        files: dict[Path, ScaffoldFile] = {}
        for contributed in results:
            for data in contributed or []:
                scaffold_file = ScaffoldFile.from_dict(data)
                path = scaffold_file.relative_path
                if path.is_absolute() or ".." in path.parts:
                    raise ValueError(f"Plugin file path escapes the output directory: {path}")
                if path in files:
                    raise ValueError(f"More than one plugin contributed {path}")
                files[path] = scaffold_file

        return [files[path] for path in sorted(files)]

    def directories(
        self, coords: ArtifactCoordinates, bindings: list[JavaClassBinding]
    ) -> list[Path]:
        """Directories created even when no file lands in them."""
        dirs = [
            Path("src/main/kotlin") / coords.group_path / coords.package_name,
            RESOURCES_DIR,
            Path("gradle/wrapper"),
        ]
        for binding in bindings:
            package_dir = Path("src/main/kotlin") / binding.package_path
            if package_dir not in dirs:
                dirs.append(package_dir)
        return dirs

    def check_overwrite(self) -> None:
        """Refuse to replace an existing project unless forced.

        Raises:
            FileExistsError: If the build script exists and force is not set
        """
        build_script = self.output_dir / BUILD_SCRIPT
        if build_script.exists() and not self.force:
            raise FileExistsError(
                f"{build_script} already exists (use --force to overwrite)"
            )

    def write(self, files: list[ScaffoldFile], directories: list[Path]) -> list[Path]:
        """Write rendered files and create directories.

        Returns:
            Paths of the written files
        """
        for directory in directories:
            (self.output_dir / directory).mkdir(parents=True, exist_ok=True)

        written = []
        for scaffold_file in files:
            path = self.output_dir / scaffold_file.relative_path
            path.parent.mkdir(parents=True, exist_ok=True)

            if isinstance(scaffold_file.content, bytes):
                path.write_bytes(scaffold_file.content)
            else:
                path.write_text(scaffold_file.content, encoding="utf-8", newline="")

            if scaffold_file.executable:
                path.chmod(path.stat().st_mode | 0o111)

            logger.debug(f"Wrote {path}")
            written.append(path)

        return written

    def run(
        self,
        group_id: str,
        package_name: str,
        manifest_path: Path | None = None,
        src_dir: Path | None = None,
        build: bool = False,
        timeout: int = BUILD_TIMEOUT_SECONDS,
    ) -> ScaffoldResult:
        """Generate the project.

        Args:
            group_id: Group identifier (e.g., 'org.apache')
            package_name: Artifact identifier (e.g., 'commons-io')
            manifest_path: Cargo.toml of the crate (optional unless build is set)
            src_dir: Rust sources scanned for #[java_class] bindings
            build: Run cargo build --release and bundle the native library
            timeout: Timeout for the cargo build in seconds

        Returns:
            ScaffoldResult with status and details
        """
        start_time = time.time()

        try:
            coords = ArtifactCoordinates(group_id=group_id, package_name=package_name)

            crate = None
            if manifest_path is not None and manifest_path.exists():
                crate = read_crate(manifest_path)
                logger.debug(f"Wrapping crate {crate.name} (lib {crate.lib_name})")
            elif build:
                raise ValueError(f"Cannot build native library: {manifest_path} not found")

            bindings = []
            if src_dir is not None and src_dir.is_dir():
                bindings = discover_bindings(src_dir)

            files = self.plan(coords, crate, bindings)
            self.check_overwrite()

        except (ValueError, OSError, TemplateError) as e:
            return ScaffoldResult.failed(
                output_dir=self.output_dir,
                error_message=str(e),
                duration_seconds=time.time() - start_time,
            )

        written = self.write(files, self.directories(coords, bindings))
        result = ScaffoldResult(
            status=ScaffoldStatus.SUCCESS,
            output_dir=self.output_dir,
            files_written=written,
            bindings=bindings,
        )

        if build and crate is not None:
            try:
                build_native(crate.crate_dir, timeout=timeout)
                result.native_artifact = copy_native_artifact(
                    target_dir=crate.crate_dir / "target",
                    lib_name=crate.lib_name,
                    resources_dir=self.output_dir / RESOURCES_DIR,
                )
            except (FileNotFoundError, RuntimeError) as e:
                result.status = ScaffoldStatus.FAILED
                result.error_message = str(e)

        result.duration_seconds = time.time() - start_time
        return result
