"""Maven coordinate models for generated projects."""

import re
from dataclasses import dataclass

# Characters that would change the meaning of a Kotlin string literal
_FORBIDDEN = re.compile(r'["\\$\x00-\x1f\x7f]')


class CoordinateError(ValueError):
    """Raised when a group or package identifier cannot be substituted safely."""


def validate_identifier(field: str, value: str) -> str:
    """Validate a single identifier before it is substituted into a template.

    Args:
        field: Field name used in the error message (e.g., 'group_id')
        value: Caller-supplied value

    Returns:
        The value, unchanged

    Raises:
        CoordinateError: If the value is empty or contains a forbidden character
    """
    if value is None or not value.strip():
        raise CoordinateError(f"{field} must not be empty")

    match = _FORBIDDEN.search(value)
    if match:
        raise CoordinateError(
            f"{field} contains forbidden character {match.group(0)!r}: {value!r}"
        )

    return value


@dataclass(frozen=True)
class ArtifactCoordinates:
    """Group and artifact identifiers of the generated library.

    Attributes:
        group_id: Namespace of the published artifact (e.g., 'org.apache')
        package_name: Artifact name within the group (e.g., 'commons-io')
    """

    group_id: str
    package_name: str

    def __post_init__(self) -> None:
        validate_identifier("group_id", self.group_id)
        validate_identifier("package_name", self.package_name)

    @property
    def project_root(self) -> str:
        """Kotlin package of the top-level Library object."""
        return f"{self.group_id}.{self.package_name}"

    @property
    def group_path(self) -> str:
        """Group identifier as a relative directory path."""
        return self.group_id.replace(".", "/")

    def to_context(self) -> dict[str, str]:
        """Template variables contributed by the coordinates."""
        return {
            "group_id": self.group_id,
            "package_name": self.package_name,
            "project_root": self.project_root,
        }


@dataclass(frozen=True)
class Publication:
    """Values recorded in the publishing block of a Gradle build script."""

    group_id: str
    artifact_id: str
    version: str
