"""Module entry point for `python -m lts.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from lts.cli import cli

    cli()
