"""Entry point for running jni-cli as a module.

Allows the package to be run as:
    python -m jni_cli
"""

import sys

from jni_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
