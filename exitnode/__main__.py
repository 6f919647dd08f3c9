"""Allow ``python -m exitnode``."""

from exitnode.cli.app import run

if __name__ == "__main__":
    run()
