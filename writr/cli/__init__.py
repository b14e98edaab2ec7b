#!/usr/bin/env python3
"""
Writr Backup CLI
----------------

Thin command-line front end for the backup engine. It only picks files
and directories and hands them to the public entry points; all behavior
lives in writr.backup.

Commands:
    - export-project: Write one project to a backup document
    - export-full: Write every project plus app settings
    - import: Validate a backup document and import it

Locations come from, in order: command-line options, the YAML file given
with --config (or ROOT/writr.yaml), and the built-in defaults.

Usage:
    writr export-project 3f2c...e9 --output-dir ~/Backups
    writr export-full
    writr import ~/Backups/writr-test-novel-2024-03-01.json --conflict duplicate
"""
import click
from pathlib import Path

from writr.core.config import WritrConfig
from writr.core.exceptions import ValidationError
from writr.core.logging_manager import WritrLogger
from writr.database import WritrDB


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with db_path / log_dir / export_dir",
)
@click.option("--db-path", type=click.Path(), default=None, help="Path to database file")
@click.option("--log-dir", type=click.Path(), default=None, help="Path to log directory")
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, config_path, db_path, log_dir, verbose):
    """Writr backup and restore"""
    ctx.ensure_object(dict)
    try:
        config = WritrConfig.load(config_path)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e

    ctx.obj["config"] = config
    ctx.obj["db_path"] = Path(db_path) if db_path else config.db_path
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else config.log_dir
    ctx.obj["export_dir"] = config.export_dir
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = WritrLogger(ctx.obj["log_dir"], component_name="cli")


def get_db(ctx) -> WritrDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = WritrDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
        )
    return ctx.obj["db"]


# Registered after the group exists
from .backup import export_full, export_project, import_backup  # noqa: E402

cli.add_command(export_project)
cli.add_command(export_full)
cli.add_command(import_backup)


if __name__ == "__main__":
    cli(obj={})
