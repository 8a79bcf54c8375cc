"""Command-line interface for editing .xcstrings catalogs."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import config
from .editing.editor import EditResult
from .editing.state import derive_state, determine_new_state
from .errors import DecodeError
from .models.string_entry import DeviceKind, PluralForm, UnitState, VariationKind
from .services.recent_files import RecentFiles
from .services.session import EditingSession
from .validation.plural_heuristics import looks_plural
from .validation.statistics import (
    find_format_issues,
    get_all_statistics,
    get_missing_translations,
    get_statistics,
)

console = Console()
err_console = Console(stderr=True)

STATE_CHOICES = [state.value for state in UnitState if state.persistable]

input_option = click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to .xcstrings file",
)
output_option = click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    help="Path to output .xcstrings file (defaults to input path)",
)
dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    help="Preview changes without saving",
)
key_option = click.option("--key", "-k", required=True, help="String key")
language_option = click.option("--language", "-l", required=True, help="Language code")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Edit Apple .xcstrings localization catalogs."""
    errors = config.validate()
    if errors:
        err_console.print("[red]Configuration errors:[/red]")
        for error in errors:
            err_console.print(f"  - {error}")
        raise click.Abort()

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _open(input_path: str) -> EditingSession:
    """Load a catalog into a fresh session."""
    session = EditingSession(
        recent_files=RecentFiles(config.history_file),
        indent=config.json_indent,
    )
    try:
        session.load(input_path)
    except DecodeError as e:
        raise click.ClickException(f"Invalid .xcstrings file: {e}")
    except OSError as e:
        raise click.ClickException(f"Cannot read {input_path}: {e}")
    return session


def _check(result: EditResult) -> None:
    if not result:
        raise click.ClickException(result.message)


def _finish(session: EditingSession, dry_run: bool, output_path: Optional[str] = None) -> None:
    """Write the session back unless this is a dry run."""
    if dry_run:
        console.print("[yellow]Dry run - no changes saved[/yellow]")
        return
    target = session.save(output_path)
    console.print(f"[blue]Writing:[/blue] {escape(str(target))}", soft_wrap=True)
    console.print("[green]Done![/green]")


@cli.command()
@input_option
@click.option("--language", "-l", default=None, help="Only show this language")
def stats(input_path: str, language: Optional[str]):
    """Show translation progress per language."""
    catalog = _open(input_path).catalog

    if language:
        rows = [get_statistics(catalog, language)]
    else:
        rows = get_all_statistics(catalog)

    table = Table(title=f"Statistics for {escape(Path(input_path).name)}")
    table.add_column("Language", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Translated", justify="right")
    table.add_column("Needs review", justify="right")
    table.add_column("Stale", justify="right")
    table.add_column("Missing", justify="right")
    table.add_column("Coverage", justify="right")

    for row in rows:
        name = row.language
        if name == catalog.source_language:
            name += " (source)"
        color = "green" if row.percentage == 100 else "yellow" if row.percentage >= 80 else "red"
        table.add_row(
            escape(name),
            str(row.total),
            str(row.translated),
            str(row.needs_review),
            str(row.stale),
            str(row.missing),
            f"[{color}]{row.percentage:.1f}%[/{color}]",
        )

    console.print(table)


@cli.command()
@input_option
def languages(input_path: str):
    """List the languages of a catalog."""
    catalog = _open(input_path).catalog
    for code in catalog.all_languages():
        suffix = " [dim](source)[/dim]" if code == catalog.source_language else ""
        console.print(f"{escape(code)}{suffix}")


@cli.command()
@input_option
@language_option
@click.option("--limit", type=int, default=20, help="Limit number of strings to show")
def missing(input_path: str, language: str, limit: int):
    """Show strings without a translation for a language."""
    catalog = _open(input_path).catalog
    keys = get_missing_translations(catalog, language)

    console.print(f"[cyan]Missing strings for {escape(language)}:[/cyan] {len(keys)} total")
    if not keys:
        console.print("[green]All strings are translated![/green]")
        return

    table = Table(show_header=True)
    table.add_column("Key", style="dim", max_width=40)
    table.add_column("Source Value", max_width=60)
    table.add_column("State", max_width=16)

    for key in keys[:limit]:
        entry = catalog.strings[key]
        state = derive_state(
            entry.get_localization(language),
            is_base_language=language == catalog.source_language,
        )
        table.add_row(
            escape(key[:40]),
            escape(entry.get_source_value(catalog.source_language)[:60]),
            state.value,
        )

    console.print(table)

    if len(keys) > limit:
        console.print(f"\n[dim]... and {len(keys) - limit} more[/dim]")


@cli.command("add-language")
@input_option
@language_option
@click.option(
    "--seed/--no-seed",
    default=True,
    help="Fill the new language with source values in state 'new' so it is saved",
)
@output_option
@dry_run_option
def add_language(input_path: str, language: str, seed: bool, output_path: Optional[str], dry_run: bool):
    """Add a language to every translatable string."""
    session = _open(input_path)
    editor = session.editor
    _check(editor.add_language(language))

    if seed:
        count = editor.copy_translations(
            session.catalog.source_language,
            language,
            overwrite_existing=True,
            new_state=UnitState.NEW,
        )
        console.print(f"[green]Added:[/green] {escape(language)} ({count} strings seeded)")
    else:
        console.print(f"[green]Added:[/green] {escape(language)}")
        console.print("[dim]Unseeded placeholders are not written to the file[/dim]")

    _finish(session, dry_run, output_path)


@cli.command("remove-language")
@input_option
@language_option
@output_option
@dry_run_option
def remove_language(input_path: str, language: str, output_path: Optional[str], dry_run: bool):
    """Remove a language from every string."""
    session = _open(input_path)
    _check(session.editor.remove_language(language))
    console.print(f"[green]Removed:[/green] {escape(language)}")
    _finish(session, dry_run, output_path)


@cli.command("add-key")
@input_option
@key_option
@click.option("--comment", "-c", default=None, help="Comment for translators")
@output_option
@dry_run_option
def add_key(input_path: str, key: str, comment: Optional[str], output_path: Optional[str], dry_run: bool):
    """Add a new string key."""
    session = _open(input_path)
    _check(session.editor.add_key(key, comment))
    console.print(f"[green]Added key:[/green] {escape(key)}")
    _finish(session, dry_run, output_path)


@cli.command("remove-key")
@input_option
@key_option
@output_option
@dry_run_option
def remove_key(input_path: str, key: str, output_path: Optional[str], dry_run: bool):
    """Remove a string key."""
    session = _open(input_path)
    _check(session.editor.remove_key(key))
    console.print(f"[green]Removed key:[/green] {escape(key)}")
    _finish(session, dry_run, output_path)


@cli.command("set")
@input_option
@key_option
@language_option
@click.option("--value", "-V", required=True, help="Translated value (empty to clear)")
@click.option(
    "--state", "-s",
    type=click.Choice(STATE_CHOICES),
    default=None,
    help="Force a state instead of detecting it",
)
@output_option
@dry_run_option
def set_translation(
    input_path: str,
    key: str,
    language: str,
    value: str,
    state: Optional[str],
    output_path: Optional[str],
    dry_run: bool,
):
    """Set the plain translation of a key, replacing any variations."""
    session = _open(input_path)
    editor = session.editor

    if state is None:
        _check(editor.commit_standard_edit(key, language, value))
    else:
        _check(editor.clear_variations(key, language))
        _check(editor.set_standard_translation(key, language, value, UnitState(state)))

    loc = session.catalog.strings[key].get_localization(language)
    shown = derive_state(loc, is_base_language=language == session.catalog.source_language)
    console.print(f"[green]Set:[/green] {escape(key)} ({escape(language)}) -> {shown.value}")
    _finish(session, dry_run, output_path)


@cli.command("set-variant")
@input_option
@key_option
@language_option
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in VariationKind]),
    required=True,
    help="Variation kind",
)
@click.option("--form", "-f", required=True, help="Plural form or device kind")
@click.option("--value", "-V", required=True, help="Translated value (empty to remove)")
@click.option("--state", "-s", type=click.Choice(STATE_CHOICES), default=None)
@output_option
@dry_run_option
def set_variant(
    input_path: str,
    key: str,
    language: str,
    kind: str,
    form: str,
    value: str,
    state: Optional[str],
    output_path: Optional[str],
    dry_run: bool,
):
    """Set one plural form or device variant of a key."""
    variation_kind = VariationKind(kind)
    form = form.strip().lower()
    valid = PluralForm if variation_kind == VariationKind.PLURAL else DeviceKind
    if form not in {item.value for item in valid}:
        choices = ", ".join(item.value for item in valid)
        raise click.BadParameter(f"must be one of: {choices}", param_hint="--form")

    session = _open(input_path)
    editor = session.editor

    if state is None:
        unit_state = determine_new_state(session.catalog, key, language, value)
    else:
        unit_state = UnitState(state)

    _check(editor.clear_standard_translation(key, language))
    _check(editor.set_variant_translation(key, language, variation_kind, form, value, unit_state))
    _check(editor.mark_duplicate_forms(key, language))
    editor.clean_empty_structures(key, language)

    console.print(f"[green]Set:[/green] {escape(key)} ({escape(language)}) {kind}.{form}")
    _finish(session, dry_run, output_path)


@cli.command()
@input_option
@key_option
@language_option
@output_option
@dry_run_option
def clear(input_path: str, key: str, language: str, output_path: Optional[str], dry_run: bool):
    """Remove all content of a key for one language."""
    session = _open(input_path)
    editor = session.editor
    _check(editor.clear_standard_translation(key, language))
    _check(editor.clear_variations(key, language))
    _check(editor.clean_empty_structures(key, language))
    console.print(f"[green]Cleared:[/green] {escape(key)} ({escape(language)})")
    _finish(session, dry_run, output_path)


@cli.command()
@input_option
@click.option("--from", "from_language", required=True, help="Language to copy from")
@click.option("--to", "to_language", required=True, help="Language to copy into")
@click.option("--overwrite", is_flag=True, help="Replace existing translations")
@click.option(
    "--state", "-s",
    type=click.Choice(STATE_CHOICES),
    default=UnitState.NEEDS_REVIEW.value,
    show_default=True,
    help="State given to copied values",
)
@output_option
@dry_run_option
def copy(
    input_path: str,
    from_language: str,
    to_language: str,
    overwrite: bool,
    state: str,
    output_path: Optional[str],
    dry_run: bool,
):
    """Copy translations from one language into another."""
    session = _open(input_path)
    count = session.editor.copy_translations(
        from_language,
        to_language,
        overwrite_existing=overwrite,
        new_state=UnitState(state),
    )
    console.print(f"[green]Copied:[/green] {count} values from {escape(from_language)} to {escape(to_language)}")
    _finish(session, dry_run, output_path)


@cli.command()
@input_option
@language_option
@click.option("--key", "-k", default=None, help="String key (default: every key that looks plural)")
@output_option
@dry_run_option
def pluralize(input_path: str, language: str, key: Optional[str], output_path: Optional[str], dry_run: bool):
    """Create plural form skeletons for pluralizable keys."""
    session = _open(input_path)
    editor = session.editor

    if key is not None:
        _check(editor.detect_and_create_plural_forms(key, language))
        keys = [key]
    else:
        keys = [
            entry.key
            for entry in session.catalog.translatable_entries()
            if looks_plural(entry.key)
        ]
        for candidate in keys:
            editor.detect_and_create_plural_forms(candidate, language)

    console.print(f"[green]Pluralized:[/green] {len(keys)} strings for {escape(language)}")
    _finish(session, dry_run, output_path)


@cli.command()
@input_option
@key_option
@output_option
@dry_run_option
def lock(input_path: str, key: str, output_path: Optional[str], dry_run: bool):
    """Mark a key "do not translate" and drop its translations."""
    session = _open(input_path)
    _check(session.editor.lock(key))
    console.print(f"[yellow]Locked:[/yellow] {escape(key)}")
    _finish(session, dry_run, output_path)


@cli.command()
@input_option
@key_option
@output_option
@dry_run_option
def unlock(input_path: str, key: str, output_path: Optional[str], dry_run: bool):
    """Allow a "do not translate" key to be translated again."""
    session = _open(input_path)
    _check(session.editor.unlock(key))
    console.print(f"[green]Unlocked:[/green] {escape(key)}")
    _finish(session, dry_run, output_path)


@cli.command("check-format")
@input_option
@language_option
def check_format(input_path: str, language: str):
    """Report translations whose format specifiers differ from the source."""
    catalog = _open(input_path).catalog
    mismatches = find_format_issues(catalog, language)

    if not mismatches:
        console.print(f"[green]No format specifier issues for {escape(language)}[/green]")
        return

    table = Table(show_header=True)
    table.add_column("Key", style="dim", max_width=30)
    table.add_column("Translation", max_width=40)
    table.add_column("Issues", max_width=50)

    for mismatch in mismatches:
        table.add_row(
            escape(mismatch.key[:30]),
            escape(mismatch.translation[:40]),
            escape("\n".join(issue.message for issue in mismatch.issues)),
        )

    console.print(table)
    console.print(Panel(f"[red]{len(mismatches)}[/red] translations with issues", title="Format Check"))
    sys.exit(1)


@cli.command()
@click.option("--prune", is_flag=True, help="Forget files that no longer exist")
@click.option("--clear", "clear_all", is_flag=True, help="Forget all files")
def recent(prune: bool, clear_all: bool):
    """List recently opened catalogs."""
    history = RecentFiles(config.history_file)

    if clear_all:
        history.clear()
        console.print("[green]File history cleared[/green]")
        return

    if prune:
        removed = history.prune()
        console.print(f"[green]Pruned:[/green] {len(removed)} missing files")

    entries = history.entries()
    if not entries:
        console.print("[dim]No recent files[/dim]")
        return

    for index, path in enumerate(entries, start=1):
        console.print(f"{index:>3}. {escape(path)}", soft_wrap=True)


if __name__ == "__main__":
    cli()
