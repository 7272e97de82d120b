"""Gradle plugin: build script, settings and wrapper configuration."""

from jinja2 import Environment

from jni_cli import hookimpl
from jni_cli.config import GRADLE_VERSION
from jni_cli.models.coordinates import ArtifactCoordinates
from jni_cli.rendering import render_build_script, render_template


@hookimpl
def scaffold_files(coords: ArtifactCoordinates, env: Environment) -> list[dict]:
    """Render the Gradle files of the generated project."""
    context = {**coords.to_context(), "gradle_version": GRADLE_VERSION}

    return [
        {
            "path": "build.gradle.kts",
            "content": render_build_script(coords, env),
        },
        {
            "path": "settings.gradle.kts",
            "content": render_template("gradle/settings.gradle.kts", context, env),
        },
        {
            "path": "gradle.properties",
            "content": render_template("gradle/gradle.properties", context, env),
        },
        {
            "path": "gradle/wrapper/gradle-wrapper.properties",
            "content": render_template("gradle/gradle-wrapper.properties", context, env),
        },
    ]
