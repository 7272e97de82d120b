"""Pytest configuration and fixtures for jni-cli tests."""

import logging
from pathlib import Path

import pytest

from jni_cli.plugins import reset_plugins


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration after each test.

    This ensures that tests which call setup_logging() don't affect
    other tests that rely on caplog fixture for log capture.
    """
    yield

    logger = logging.getLogger("jni_cli")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def clean_plugins():
    """Start and finish every test with an uninitialized plugin manager."""
    reset_plugins()
    yield
    reset_plugins()


@pytest.fixture
def crate_dir(tmp_path: Path) -> Path:
    """A minimal Rust crate with two #[java_class] bindings."""
    (tmp_path / "Cargo.toml").write_text(
        "[package]\n"
        'name = "tokenizers-jni"\n'
        'version = "0.1.0"\n'
        "\n"
        "[lib]\n"
        'crate-type = ["cdylib"]\n'
    )

    src = tmp_path / "src"
    (src / "depth").mkdir(parents=True)
    (src / "lib.rs").write_text(
        "use jni_cli_macro::java_class;\n"
        "\n"
        "struct Tokenizer(tkz::Tokenizer);\n"
        "\n"
        '#[java_class("dev.gigapixel.tokenizers")]\n'
        "impl Tokenizer {\n"
        "    fn tokenize(&self, text: String) -> Vec<String> {\n"
        "        todo!()\n"
        "    }\n"
        "}\n"
    )
    (src / "depth" / "boop.rs").write_text(
        "pub(crate) struct SomeStruct;\n"
        "\n"
        '#[java_class("beep.boop")]\n'
        "impl SomeStruct {\n"
        "    fn do_more_stuff(&self, string: String) -> i64 {\n"
        "        string.len() as i64\n"
        "    }\n"
        "}\n"
    )
    return tmp_path
