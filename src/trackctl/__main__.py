"""Allow ``python -m trackctl``; used by ``fork`` to spawn the waiter."""

from trackctl.cli import cli

if __name__ == "__main__":
    cli()
