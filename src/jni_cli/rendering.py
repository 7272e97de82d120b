"""Jinja2 template loading and rendering with per-project override support."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    meta,
)

from jni_cli.config import BUILD_SCRIPT_TEMPLATE, TEMPLATE_OVERRIDE_DIR
from jni_cli.logging_config import get_logger
from jni_cli.models.coordinates import ArtifactCoordinates

logger = get_logger(__name__)


class TemplateTokenError(ValueError):
    """Raised when a template references a token the caller did not supply."""

    def __init__(self, template_name: str, missing: set[str]):
        self.template_name = template_name
        self.missing = sorted(missing)
        super().__init__(
            f"Template '{template_name}' is missing values for: {', '.join(self.missing)}"
        )


class ExactFileSystemLoader(FileSystemLoader):
    """FileSystemLoader that keeps the line endings of override files.

    The stock loader reads in text mode, which folds CRLF into LF before
    the template is ever rendered.
    """

    def get_source(self, environment: Environment, template: str):
        _, filename, uptodate = super().get_source(environment, template)
        with open(filename, "rb") as f:
            contents = f.read().decode(self.encoding)
        return contents, filename, uptodate


def detect_newline(source: str) -> str:
    """Return the line ending used by a template (CRLF, CR or LF)."""
    if "\r\n" in source:
        return "\r\n"
    if "\r" in source:
        return "\r"
    return "\n"


def build_template_environment(project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with project overrides before packaged defaults.

    Overrides are loaded from ``.jni-cli/templates/`` inside the project root,
    using the same relative names as the packaged templates
    (for example ``.jni-cli/templates/gradle/build.gradle.kts``).
    """
    loaders: list[BaseLoader] = []
    if project_root is not None:
        loaders.append(ExactFileSystemLoader(str(project_root / TEMPLATE_OVERRIDE_DIR)))

    loaders.append(PackageLoader("jni_cli", "templates"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )


_default_environment: Environment | None = None


def _get_environment(env: Environment | None) -> Environment:
    global _default_environment

    if env is not None:
        return env
    if _default_environment is None:
        _default_environment = build_template_environment()
    return _default_environment


def load_template_source(name: str, env: Environment | None = None) -> str:
    """Return the unrendered text of a template."""
    env = _get_environment(env)
    if env.loader is None:
        raise ValueError("Template environment has no loader")
    source, _, _ = env.loader.get_source(env, name)
    return source


def template_variables(name: str, env: Environment | None = None) -> set[str]:
    """Collect every variable a template references.

    Args:
        name: Template name relative to the templates root
        env: Optional environment (defaults to packaged templates only)

    Returns:
        Set of variable names
    """
    env = _get_environment(env)
    ast = env.parse(load_template_source(name, env))
    return meta.find_undeclared_variables(ast)


def render_template(name: str, context: dict[str, Any], env: Environment | None = None) -> str:
    """Render a template after checking that every token has a value.

    Args:
        name: Template name relative to the templates root
        context: Substitution values
        env: Optional environment (defaults to packaged templates only)

    Returns:
        Rendered text

    Raises:
        TemplateTokenError: If the template references a token missing from context
    """
    env = _get_environment(env)
    source = load_template_source(name, env)

    supplied = {key for key, value in context.items() if value is not None}
    missing = meta.find_undeclared_variables(env.parse(source)) - supplied
    if missing:
        raise TemplateTokenError(name, missing)

    # Render with the template's own line ending so static lines stay byte-identical
    newline = detect_newline(source)
    if newline != env.newline_sequence:
        env = env.overlay(newline_sequence=newline, cache_size=0)

    logger.debug(f"Rendering template {name}")
    return env.from_string(source).render(**context)


def render_build_script(coords: ArtifactCoordinates, env: Environment | None = None) -> str:
    """Render the Gradle build script for the given coordinates."""
    return render_template(BUILD_SCRIPT_TEMPLATE, coords.to_context(), env)
