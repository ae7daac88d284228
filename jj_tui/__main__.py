"""Entry point for jj-tui."""

from typing import Optional

import click

from jj_tui.commander import CommandError, Commander
from jj_tui.config import get_config
from jj_tui.logger import setup_logging


@click.command()
@click.argument(
    "path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
)
@click.option("-r", "--revisions", default=None, help="Revset shown in the log tab.")
@click.option("--jj-bin", default=None, envvar="JJ_TUI_JJ_BIN", help="jj executable to run.")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="Write a debug log here.")
def main(path: str, revisions: Optional[str], jj_bin: Optional[str], log_file: Optional[str]) -> None:
    """Run jj-tui on the jj repository containing PATH."""
    from jj_tui.app import JjApp

    config = get_config()
    if jj_bin:
        config.jj_bin = jj_bin
    logger = setup_logging(log_file or config.log_file)

    try:
        root = Commander.find_root(path, config.jj_bin)
    except CommandError as e:
        logger.error("Cannot open repository at %s: %s", path, e)
        click.echo(f"Error: {str(e).strip()}", err=True)
        raise SystemExit(1) from None

    commander = Commander(root, config.jj_bin)
    app = JjApp(commander, config, revset=revisions)
    app.run()


if __name__ == "__main__":
    main()
