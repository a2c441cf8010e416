#!/usr/bin/env python3
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console

from .config import DEFAULT_CONFIG_FILENAME, Config
from .message import Message
from .observers import ConsoleLogObserver, FileLogObserver, LintObserver
from .sources import default_edit_file, is_merge_message, read_commit_range, read_edit_file
from .validator import validate

console = Console()


async def lint_messages(
    messages: List[Tuple[str, str]],
    config: Config,
    observers: List[LintObserver],
) -> int:
    """Lint each ``(source, text)`` pair and notify observers.

    Returns:
        int: Number of messages with error-level violations
    """
    total = 0
    failed = 0
    for source, text in messages:
        if config.ignore_merges and is_merge_message(text):
            continue

        message = Message.parse(text)
        result = await validate(message, config)
        total += 1
        if result.has_errors:
            failed += 1

        for observer in observers:
            await observer.on_message_linted(source, message, result)

    for observer in observers:
        await observer.on_lint_completed(total, failed)
    return failed


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<24} {'Value':<20}")
    console.print("-" * 44)
    console.print(f"{'ignore_merges':<24} {str(config.ignore_merges):<20}")
    console.print(f"{'always_log':<24} {str(config.always_log):<20}")
    console.print(f"{'log_file':<24} {str(config.log_file or 'None'):<20}")

    console.print(f"\n{'Rule':<24} {'Level':<10} {'Options'}")
    console.print("-" * 60)
    for rule in config.rules:
        options = {k: v for k, v in rule.options().items() if k != "level"}
        extra = ", ".join(f"{k}={v}" for k, v in options.items())
        console.print(f"{rule.name:<24} {rule.level.value:<10} {extra}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-e",
    "--edit",
    is_flag=False,
    flag_value="",
    default=None,
    help="Lint a commit message file; without a value, the repository's COMMIT_EDITMSG",
)
@click.option(
    "--from",
    "from_rev",
    help="Lint commits after this revision (exclusive)",
)
@click.option(
    "--to",
    "to_rev",
    help="Lint commits up to this revision (inclusive, defaults to HEAD)",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Path to config file (defaults to {DEFAULT_CONFIG_FILENAME} in the repository)",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--init", is_flag=True, help=f"Create {DEFAULT_CONFIG_FILENAME} with default values"
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log lint results (overrides config setting)",
)
@click.option("-v", "--verbose", is_flag=True, help="Also report messages that pass")
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    path: Path,
    edit: Optional[str],
    from_rev: Optional[str],
    to_rev: Optional[str],
    config_file: Optional[Path],
    config_list: bool,
    init: bool,
    log_file: Optional[Path],
    verbose: bool,
    version: bool,
):
    """
    Lint commit messages against the Conventional Commits format.

    The message is read from standard input unless --edit, --from or --to
    is given. Exits with status 1 when any message has error-level
    violations; warnings are reported but don't fail.

    Configuration can be set in .gitcommitlint.toml in the repository root.
    Command line options override configuration file settings.
    """
    failed = 0
    try:
        if version:
            from .version import display_version_info

            display_version_info(console)
            return

        repo_path = path.absolute()
        config_path = config_file or repo_path / DEFAULT_CONFIG_FILENAME

        if init:
            if config_path.exists():
                console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
            else:
                Config().save(repo_path)
                console.print(f"[green]Created config file with default values:[/green] {config_path}")
            return

        config = Config.load(repo_path, config_file)

        if config_list:
            print_config(config, config_path)
            return

        if log_file is not None:
            config.log_file = str(log_file)

        if edit is not None:
            edit_path = Path(edit) if edit else default_edit_file(repo_path)
            messages = [(str(edit_path), read_edit_file(edit_path))]
        elif from_rev is not None or to_rev is not None:
            messages = read_commit_range(repo_path, from_rev, to_rev or "HEAD")
        else:
            messages = [("stdin", click.get_text_stream("stdin").read())]

        observers: List[LintObserver] = [ConsoleLogObserver(console, verbose=verbose)]
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            observers.append(FileLogObserver(str(log_file_path)))

        failed = asyncio.run(lint_messages(messages, config, observers))
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
