"""
zui CLI entry point.

Usage:
    python -m zui [OPTIONS] COMMAND [ARGS]...
"""

from .cli import main

if __name__ == "__main__":
    main()
