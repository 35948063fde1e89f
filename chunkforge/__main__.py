"""Package entry point.

Allows running the CLI as: python -m chunkforge
"""

from chunkforge.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
