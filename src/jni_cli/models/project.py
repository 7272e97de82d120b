"""Models describing the Rust crate and the generated project."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class RustCrate:
    """Rust crate read from Cargo.toml.

    Attributes:
        name: Package name from [package].name
        lib_name: Library target name (used for the native artifact filename)
        manifest_path: Path to the Cargo.toml it was read from
    """

    name: str
    lib_name: str
    manifest_path: Path

    @property
    def crate_dir(self) -> Path:
        return self.manifest_path.parent


@dataclass(frozen=True)
class JavaClassBinding:
    """A Rust type exported to the JVM through #[java_class("package")]."""

    rust_type: str
    package: str

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.rust_type}"

    @property
    def package_path(self) -> str:
        return self.package.replace(".", "/")


@dataclass
class ScaffoldFile:
    """A single file produced for the generated project.

    Attributes:
        relative_path: Path relative to the output directory
        content: File content (text or raw bytes)
        executable: Whether to set the executable bit after writing
    """

    relative_path: Path
    content: str | bytes
    executable: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "ScaffoldFile":
        """Create ScaffoldFile from a plugin hook result.

        Args:
            data: Dict with 'path', 'content' and optional 'executable'

        Returns:
            ScaffoldFile instance
        """
        return cls(
            relative_path=Path(data["path"]),
            content=data["content"],
            executable=data.get("executable", False),
        )


class ScaffoldStatus(Enum):
    """Status of a scaffold run.

    Values:
        SUCCESS: All files were written
        FAILED: Nothing usable was produced
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ScaffoldResult:
    """Result of generating a Kotlin/Gradle project."""

    status: ScaffoldStatus
    output_dir: Path
    files_written: list[Path] = field(default_factory=list)
    bindings: list[JavaClassBinding] = field(default_factory=list)
    native_artifact: Path | None = None
    error_message: str | None = None
    duration_seconds: float = 0.0

    @classmethod
    def failed(cls, output_dir: Path, error_message: str, duration_seconds: float = 0.0) -> "ScaffoldResult":
        """Create a failed result.

        Args:
            output_dir: Directory the project was meant to be generated into
            error_message: Error message
            duration_seconds: Time spent before failing

        Returns:
            ScaffoldResult with FAILED status
        """
        return cls(
            status=ScaffoldStatus.FAILED,
            output_dir=output_dir,
            error_message=error_message,
            duration_seconds=duration_seconds,
        )
