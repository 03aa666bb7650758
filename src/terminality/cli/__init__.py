"""CLI entry point: Click group with global options."""

from __future__ import annotations

import logging

import click

from terminality import __version__


@click.group()
@click.version_option(version=__version__, prog_name="terminality")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Terminality: raw-mode terminal control and key decoding."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from terminality.cli.bounce import bounce  # noqa: F811
    from terminality.cli.info import info  # noqa: F811
    from terminality.cli.keys import keys  # noqa: F811

    main.add_command(keys)
    main.add_command(bounce)
    main.add_command(info)


_register_commands()
