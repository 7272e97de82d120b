"""Command-line interface for jni-cli."""

from pathlib import Path

import click

from jni_cli.config import (
    BUILD_SCRIPT_TEMPLATE,
    BUILD_TIMEOUT_SECONDS,
    DEFAULT_MANIFEST,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_DIR,
    GROUP_ENVVAR,
    PACKAGE_ENVVAR,
    __version__,
)
from jni_cli.console import print_bindings, success
from jni_cli.logging_config import get_logger, setup_logging
from jni_cli.models.coordinates import ArtifactCoordinates, CoordinateError
from jni_cli.models.project import ScaffoldStatus
from jni_cli.parsers.cargo import crate_defaults
from jni_cli.parsers.gradle_build import verify_build_script
from jni_cli.parsers.java_class import discover_bindings
from jni_cli.rendering import (
    TemplateTokenError,
    build_template_environment,
    load_template_source,
    render_build_script,
)
from jni_cli.scaffold import Scaffolder

logger = get_logger(__name__)


class JniCLI:
    """Command-line interface orchestrator for jni-cli."""

    def __init__(self, manifest_path: Path = DEFAULT_MANIFEST):
        """Initialize CLI orchestrator.

        Args:
            manifest_path: Cargo.toml of the crate being wrapped
        """
        self.manifest_path = manifest_path

    def resolve_coordinates(self, group: str | None, package: str | None) -> tuple[str, str]:
        """Fill in group and package from Cargo metadata when not given.

        Args:
            group: Group identifier from the command line or environment
            package: Package identifier from the command line or environment

        Returns:
            Tuple of (group, package)

        Raises:
            click.UsageError: If either value is still missing
            click.ClickException: If the manifest has to be read and cannot be parsed
        """
        if not group or not package:
            try:
                defaults = crate_defaults(self.manifest_path)
            except ValueError as e:
                raise click.ClickException(str(e)) from e

            group = group or defaults.get("group")
            package = package or defaults.get("package")

        if not group:
            raise click.UsageError(
                f"Missing group: pass --group, set {GROUP_ENVVAR}, "
                f"or add group to [package.metadata.jni-cli] in {self.manifest_path}"
            )
        if not package:
            raise click.UsageError(
                f"Missing package: pass --package, set {PACKAGE_ENVVAR}, "
                f"or add package to [package.metadata.jni-cli] in {self.manifest_path}"
            )

        return group, package

    def execute(
        self,
        group: str,
        package: str,
        output_dir: Path,
        src_dir: Path,
        build: bool,
        force: bool,
        timeout: int,
    ) -> int:
        """Generate the Kotlin/Gradle project.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        try:
            logger.info(f"Group: {group}")
            logger.info(f"Package: {package}")
            logger.info(f"Output dir: {output_dir}")

            scaffolder = Scaffolder(
                output_dir=output_dir,
                project_root=self.manifest_path.parent,
                force=force,
            )
            result = scaffolder.run(
                group_id=group,
                package_name=package,
                manifest_path=self.manifest_path,
                src_dir=src_dir,
                build=build,
                timeout=timeout,
            )

            for path in result.files_written:
                logger.info(f"Generated: {path}")
            for binding in result.bindings:
                logger.info(f"Found binding: {binding.rust_type} -> {binding.qualified_name}")

            if result.status == ScaffoldStatus.FAILED:
                logger.error(result.error_message)
                return 1

            success(f"Generated {len(result.files_written)} files in {result.duration_seconds:.2f}s")
            return 0

        except KeyboardInterrupt:
            logger.error("Interrupted by user")
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            logger.debug("Traceback:", exc_info=True)
            return 1


def _coordinate_options(func):
    """Shared --group/--package options."""
    func = click.option(
        "-p",
        "--package",
        envvar=PACKAGE_ENVVAR,
        default=None,
        help="Name of the package e.g. commons-io",
    )(func)
    func = click.option(
        "-g",
        "--group",
        envvar=GROUP_ENVVAR,
        default=None,
        help="Name of the group e.g. org.apache",
    )(func)
    return func


def _manifest_option(func):
    """Shared --manifest option; its directory also holds template overrides."""
    return click.option(
        "--manifest",
        type=click.Path(dir_okay=False, path_type=Path),  # type: ignore[type-var]
        default=DEFAULT_MANIFEST,
        show_default=True,
        help="Cargo.toml of the crate",
    )(func)


@click.group()
@click.version_option(__version__, prog_name="jni-cli")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output (DEBUG level)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Show only warnings and errors",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Explicit log level (overrides -v/-q)",
)
def cli(verbose, quiet, log_level):
    """Generate a Kotlin/Gradle project that wraps a Rust JNI crate."""
    if sum([verbose, quiet, log_level is not None]) > 1:
        raise click.UsageError("--verbose, --quiet, and --log-level are mutually exclusive")

    setup_logging(verbose=verbose, quiet=quiet, log_level=log_level)


@cli.command(name="init")
@_coordinate_options
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(path_type=Path),  # type: ignore[type-var]
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Directory for the generated project",
)
@click.option(
    "--src",
    "src_dir",
    type=click.Path(path_type=Path),  # type: ignore[type-var]
    default=DEFAULT_SOURCE_DIR,
    show_default=True,
    help="Rust sources to scan for #[java_class] bindings",
)
@_manifest_option
@click.option(
    "--build/--no-build",
    default=False,
    show_default=True,
    help="Run cargo build --release and bundle the native library",
)
@click.option("--force", is_flag=True, help="Overwrite an existing project")
@click.option(
    "--timeout",
    type=int,
    default=BUILD_TIMEOUT_SECONDS,
    show_default=True,
    help="Timeout for cargo build in seconds",
)
def init(group, package, output_dir, src_dir, manifest, build, force, timeout):
    """Generate the Kotlin/Gradle project."""
    jni_cli = JniCLI(manifest_path=manifest)
    group, package = jni_cli.resolve_coordinates(group, package)

    exit_code = jni_cli.execute(
        group=group,
        package=package,
        output_dir=output_dir,
        src_dir=src_dir,
        build=build,
        force=force,
        timeout=timeout,
    )

    raise SystemExit(exit_code)


@cli.command(name="render")
@_coordinate_options
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),  # type: ignore[type-var]
    default=None,
    help="Write to this file instead of stdout",
)
@_manifest_option
def render(group, package, output, manifest):
    """Render build.gradle.kts for a group and package."""
    group, package = JniCLI(manifest_path=manifest).resolve_coordinates(group, package)

    try:
        coords = ArtifactCoordinates(group_id=group, package_name=package)
        text = render_build_script(coords, build_template_environment(manifest.parent))
    except (CoordinateError, TemplateTokenError) as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8", newline="")
    logger.info(f"Generated: {output}")


@cli.command(name="verify")
@click.argument("build_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))  # type: ignore[type-var]
@_coordinate_options
@_manifest_option
def verify(build_file, group, package, manifest):
    """Check that BUILD_FILE is an exact rendering for a group and package."""
    group, package = JniCLI(manifest_path=manifest).resolve_coordinates(group, package)

    try:
        coords = ArtifactCoordinates(group_id=group, package_name=package)
    except CoordinateError as e:
        raise click.ClickException(str(e)) from e

    template = load_template_source(BUILD_SCRIPT_TEMPLATE, build_template_environment(manifest.parent))
    # Decode bytes directly; text mode would fold CRLF line endings
    text = build_file.read_bytes().decode("utf-8")
    problems = verify_build_script(text, coords, template)

    if problems:
        for problem in problems:
            logger.error(problem)
        raise SystemExit(1)

    success(f"{build_file} publishes {coords.group_id}:{coords.package_name}")


@cli.command(name="list-classes")
@click.option(
    "--src",
    "src_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),  # type: ignore[type-var]
    default=DEFAULT_SOURCE_DIR,
    show_default=True,
    help="Rust sources to scan",
)
def list_classes(src_dir):
    """List #[java_class] bindings in the crate sources."""
    try:
        bindings = discover_bindings(src_dir)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if not bindings:
        click.echo(f"No #[java_class] bindings found in {src_dir}")
        raise SystemExit(1)

    print_bindings(bindings)


@cli.command(name="list-plugins")
def list_plugins():
    """List loaded scaffold plugins."""
    from jni_cli.plugins import get_plugins

    for plugin in get_plugins():
        click.echo(f"  {click.style(plugin['name'], bold=True)}")
        if plugin["module"] != plugin["name"]:
            click.echo(f"    {plugin['module']}")


def main():
    """Entry point for jni-cli command."""
    cli()


if __name__ == "__main__":
    main()
