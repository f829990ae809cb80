"""Entry point for running pwappy-e2e as a module.

Usage:
    uv run python -m pwappy_e2e cleanup
    uv run python -m pwappy_e2e check-config
"""

from pwappy_e2e.cli import main

if __name__ == "__main__":
    main()
