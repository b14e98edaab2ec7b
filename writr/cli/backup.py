"""
Backup Commands
---------------

Commands:
    - export-project: Export one project
    - export-full: Export everything
    - import: Import a backup document
"""
import click
from pathlib import Path

from writr.backup import (
    BackupExporter,
    BackupImporter,
    ConflictResolution,
    ImportOptions,
    is_full_backup,
    parse_backup_file,
)
from writr.core.exceptions import BackupValidationError, DatabaseError
from writr.core.logging_manager import handle_cli_error
from . import get_db


@click.command("export-project")
@click.argument("project_id")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the backup file",
)
@click.pass_context
def export_project(ctx, project_id, output_dir):
    """Export one project to a backup file."""
    try:
        click.echo(f"📤 Exporting project {project_id}...")
        path = BackupExporter(get_db(ctx)).download_project_backup(
            project_id, output_dir or ctx.obj["export_dir"]
        )
        click.echo(f"✅ Backup written: {path}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "export_project", {"project_id": project_id})


@click.command("export-full")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the backup file",
)
@click.pass_context
def export_full(ctx, output_dir):
    """Export every project plus app settings."""
    try:
        click.echo("📤 Exporting full backup...")
        path = BackupExporter(get_db(ctx)).download_full_backup(
            output_dir or ctx.obj["export_dir"]
        )
        click.echo(f"✅ Backup written: {path}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "export_full")


@click.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--conflict",
    type=click.Choice(ConflictResolution.choices()),
    default=ConflictResolution.SKIP.value,
    help="What to do when a project already exists",
)
@click.option(
    "--restore-settings",
    is_flag=True,
    help="Overwrite app settings and dictionary (full backups only)",
)
@click.pass_context
def import_backup(ctx, backup_file, conflict, restore_settings):
    """Import a backup file."""
    try:
        backup = parse_backup_file(Path(backup_file).read_bytes())
    except BackupValidationError as e:
        handle_cli_error(ctx, e, "parse_backup", {"file": backup_file})
        return

    kind = "full" if is_full_backup(backup) else "project"
    click.echo(f"📥 Importing {kind} backup ({conflict})...")

    result = BackupImporter(get_db(ctx)).import_backup(
        backup,
        ImportOptions(
            conflict_resolution=ConflictResolution(conflict),
            restore_settings=restore_settings,
        ),
    )

    if not result.success:
        for error in result.errors:
            click.echo(f"❌ {error}", err=True)
        click.echo("No changes were made.", err=True)
        ctx.exit(1)

    click.echo("✅ Import complete")
    click.echo(f"  Imported: {result.projects_imported}")
    click.echo(f"  Skipped: {result.projects_skipped}")
    click.echo(f"  Replaced: {result.projects_replaced}")
    if result.settings_restored:
        click.echo("  Settings restored")
