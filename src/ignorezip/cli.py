"""ignorezip CLI: zip a directory, honoring .gitignore and .customignore files."""

from __future__ import annotations

import click

from .archive import ArchiveSummary, create_archive
from .exceptions import IgnoreZipError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _RuntimeFailure(click.ClickException):
    """A failure after the arguments were accepted (exit code 2)."""
    exit_code = 2


class _ArchiveCommand(click.Command):
    """Command whose usage errors exit with 1 instead of click's 2."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _status(ctx, msg):
    """Emit a progress message to stderr unless quiet mode (-q) is on."""
    if not ctx.obj.get("quiet"):
        click.echo(msg, err=True)


def _print_summary(summary: ArchiveSummary, dry_run: bool):
    click.echo("Summary:")
    click.echo(f"Total files included: {summary.files_included}")
    click.echo(f"Total paths excluded: {summary.entries_excluded}")
    if summary.errors:
        click.echo(f"Unreadable entries skipped: {len(summary.errors)}")
    if dry_run:
        click.echo("Dry run: no archive written")
    else:
        click.echo(f"Archive: {summary.output}")


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command(cls=_ArchiveCommand)
@click.argument("root_folder", type=click.Path())
@click.argument("output_archive", type=click.Path())
@click.option("-q", "--quiet", is_flag=True,
              help="Only print the summary, not per-rule and per-file progress.")
@click.option("-n", "--dry-run", is_flag=True,
              help="Resolve and report every path without writing the archive.")
@click.option("--follow-symlinks", is_flag=True,
              help="Descend into symlinked directories (cycles are skipped).")
@click.pass_context
def main(ctx, root_folder, output_archive, quiet, dry_run, follow_symlinks):
    """Zip ROOT_FOLDER into OUTPUT_ARCHIVE, skipping ignored files.

    Every .gitignore and .customignore file under ROOT_FOLDER is loaded.
    Rules in .customignore always win over .gitignore rules, and a file
    whose exact name is listed in a .customignore above it is excluded.
    Anything under a .git directory is never archived.

    \b
    Exit codes:
      0  archive written (or dry run completed)
      1  usage error
      2  runtime failure (missing folder, bad pattern, write error)
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    try:
        summary = create_archive(
            root_folder, output_archive,
            dry_run=dry_run,
            follow_symlinks=follow_symlinks,
            progress=lambda msg: _status(ctx, msg),
        )
    except IgnoreZipError as exc:
        raise _RuntimeFailure(str(exc))
    except OSError as exc:
        raise _RuntimeFailure(f"{exc.filename or root_folder}: {exc.strerror or exc}")
    _print_summary(summary, dry_run)
