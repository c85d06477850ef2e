"""Run script.

Why it exists:
- Lets you run the CLI with `python -m main` from inside `src/`.
- Keeps a simple entry point next to the installed `secure-props` script.
"""

from __future__ import annotations

import sys

# Windows terminals (cp1252) cannot print the result panel otherwise.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
