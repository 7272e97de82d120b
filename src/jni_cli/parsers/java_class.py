"""Discovery of #[java_class("package")] impl blocks in Rust sources."""

import re
from pathlib import Path

from jni_cli.logging_config import get_logger
from jni_cli.models.project import JavaClassBinding

logger = get_logger(__name__)

PackageLookup = dict[str, str]

# #[java_class("dev.example")] followed by other attributes, then impl [<..>] Type
JAVA_CLASS_PATTERN = re.compile(
    r'#\[\s*java_class\s*\(\s*"(?P<package>[^"]*)"\s*\)\s*\]'
    r"(?:\s*#\[[^\]]*\])*"
    r"\s*impl\s*(?:<[^>{]*>\s*)?(?P<type>[A-Za-z_][A-Za-z0-9_]*)"
)

_LINE_COMMENT = re.compile(r"//[^\n]*")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


def _strip_comments(source: str) -> str:
    return _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", source))


def find_bindings(source: str) -> list[JavaClassBinding]:
    """Find every #[java_class] impl block in a Rust source file.

    Args:
        source: Rust source code

    Returns:
        Bindings in source order
    """
    return [
        JavaClassBinding(rust_type=match.group("type"), package=match.group("package"))
        for match in JAVA_CLASS_PATTERN.finditer(_strip_comments(source))
    ]


def discover_bindings(src_dir: Path) -> list[JavaClassBinding]:
    """Walk src_dir for *.rs files and collect their bindings.

    Raises:
        ValueError: If the same Rust type is bound more than once
    """
    bindings: list[JavaClassBinding] = []
    seen: set[str] = set()

    for path in sorted(src_dir.rglob("*.rs")):
        logger.debug(f"Scanning {path}")
        for binding in find_bindings(path.read_text(encoding="utf-8")):
            if binding.rust_type in seen:
                raise ValueError(
                    f"Found more than one #[java_class] for struct_name {binding.rust_type}"
                )
            seen.add(binding.rust_type)
            bindings.append(binding)

    return bindings


def build_lookup(src_dir: Path) -> PackageLookup:
    """Map each bound Rust type to its fully qualified JVM class name."""
    return {binding.rust_type: binding.qualified_name for binding in discover_bindings(src_dir)}
