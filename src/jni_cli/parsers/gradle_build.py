"""Parsing and verification of generated Gradle Kotlin-DSL build scripts."""

import re
from dataclasses import dataclass

from jni_cli.models.coordinates import ArtifactCoordinates, Publication

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

_PUBLISHING_PATTERN = re.compile(r"^\s*publishing\s*\{", re.MULTILINE)


def _assignment_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf'\b{name}\s*=\s*"([^"]*)"')


@dataclass(frozen=True)
class LineDiff:
    """A line of a rendered file that differs from the expected rendering.

    Attributes:
        line_number: 1-based line number
        expected: Expected line, or None if the rendered file has extra lines
        actual: Rendered line, or None if the rendered file is short
    """

    line_number: int
    expected: str | None
    actual: str | None

    def describe(self) -> str:
        if self.actual is None:
            return f"line {self.line_number}: missing, expected {self.expected!r}"
        if self.expected is None:
            return f"line {self.line_number}: unexpected {self.actual!r}"
        return f"line {self.line_number}: expected {self.expected!r}, found {self.actual!r}"


def _block_body(text: str, open_brace: int) -> str:
    """Return the text between the brace at open_brace and its matching close."""
    depth = 0
    in_string = False
    i = open_brace
    while i < len(text):
        char = text[i]
        if in_string:
            if char == "\\":
                i += 1
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[open_brace + 1 : i]
        i += 1

    raise ValueError("Unterminated publishing block")


def parse_publication(text: str) -> Publication:
    """Extract the publication coordinates from a build script.

    Args:
        text: Build script content

    Returns:
        Publication with group, artifact and version

    Raises:
        ValueError: If there is no publishing block or an assignment is missing
    """
    match = _PUBLISHING_PATTERN.search(text)
    if match is None:
        raise ValueError("No publishing block found in build script")

    body = _block_body(text, match.end() - 1)

    values = {}
    for name in ("groupId", "artifactId", "version"):
        assignment = _assignment_pattern(name).search(body)
        if assignment is None:
            raise ValueError(f"No {name} assignment in publishing block")
        values[name] = assignment.group(1)

    return Publication(
        group_id=values["groupId"],
        artifact_id=values["artifactId"],
        version=values["version"],
    )


def substitute_line(line: str, context: dict[str, str]) -> str:
    """Replace placeholders on a single template line with their values."""
    return PLACEHOLDER_PATTERN.sub(lambda m: context[m.group(1)], line)


def diff_against_template(rendered: str, template: str, context: dict[str, str]) -> list[LineDiff]:
    """Compare a rendered file with its template, line by line.

    Lines without placeholders must be byte-identical to the template.
    Lines with placeholders must equal the template line with only the
    placeholder spans replaced.

    Args:
        rendered: Rendered file content
        template: Unrendered template text
        context: Values the placeholders were substituted with

    Returns:
        List of differing lines (empty if the rendering is exact)
    """
    expected_lines = [substitute_line(line, context) for line in template.splitlines(keepends=True)]
    actual_lines = rendered.splitlines(keepends=True)

    diffs = []
    for index in range(max(len(expected_lines), len(actual_lines))):
        expected = expected_lines[index] if index < len(expected_lines) else None
        actual = actual_lines[index] if index < len(actual_lines) else None
        if expected != actual:
            diffs.append(LineDiff(line_number=index + 1, expected=expected, actual=actual))

    return diffs


def verify_build_script(text: str, coords: ArtifactCoordinates, template: str) -> list[str]:
    """Check that a build script was rendered from template with coords.

    Args:
        text: Build script content to verify
        coords: Coordinates the script should have been rendered with
        template: Unrendered build script template

    Returns:
        List of problems (empty if the script is an exact rendering)
    """
    problems = []

    try:
        publication = parse_publication(text)
    except ValueError as e:
        problems.append(str(e))
    else:
        if publication.group_id != coords.group_id:
            problems.append(
                f"groupId is {publication.group_id!r}, expected {coords.group_id!r}"
            )
        if publication.artifact_id != coords.package_name:
            problems.append(
                f"artifactId is {publication.artifact_id!r}, expected {coords.package_name!r}"
            )

    try:
        diffs = diff_against_template(text, template, coords.to_context())
    except KeyError as e:
        problems.append(f"Template references unknown token {e}")
    else:
        problems.extend(diff.describe() for diff in diffs)

    return problems
