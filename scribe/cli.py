"""
Command-line interface for scribe.

`scribe shell` opens an interactive session over a fresh in-memory
workspace; `scribe demo` replays a short scripted session.
"""

import asyncio
import shlex
from pathlib import Path
from typing import Callable, Dict, List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from scribe.config import WorkspaceConfig, config
from scribe.logging import Severity, TerminalBuffer, TerminalLog, initialize_logging
from scribe.ui import KeyBindingMap
from scribe.version_control import FileRecord, FileStatus, Workspace

console = Console()

SEVERITY_STYLES: Dict[Severity, str] = {
    Severity.INFO: "white",
    Severity.SUCCESS: "green",
    Severity.ERROR: "red",
    Severity.SYSTEM: "italic blue",
}


def print_entry(entry: TerminalLog) -> None:
    """Echo a terminal entry with its severity colour."""
    console.print(entry.text, style=SEVERITY_STYLES[entry.severity], markup=False)


class ScribeShell:
    """Interactive shell over one workspace."""

    def __init__(self, settings: WorkspaceConfig):
        self.terminal = TerminalBuffer()
        self.terminal.subscribe(print_entry)
        self.workspace = Workspace(settings, sink=self.terminal)
        self.keys = KeyBindingMap(sink=self.terminal)
        self.running = True

        self.commands: Dict[str, Callable[[List[str]], None]] = {
            "help": self.cmd_help,
            "ls": self.cmd_ls,
            "new": self.cmd_new,
            "open": self.cmd_open,
            "cat": self.cmd_cat,
            "write": self.cmd_write,
            "append": self.cmd_append,
            "rename": self.cmd_rename,
            "rm": self.cmd_rm,
            "status": self.cmd_status,
            "add": self.cmd_add,
            "add-all": self.cmd_add_all,
            "reset": self.cmd_reset,
            "commit": self.cmd_commit,
            "log": self.cmd_log,
            "show": self.cmd_show,
            "diff": self.cmd_diff,
            "push": self.cmd_push,
            "pull": self.cmd_pull,
            "keys": self.cmd_keys,
            "bind": self.cmd_bind,
            "exit": self.cmd_exit,
            "quit": self.cmd_exit,
        }

    def run(self) -> None:
        """Run the read-eval loop until exit or end of input."""
        console.print(
            Panel.fit(
                "[bold cyan]scribe[/bold cyan] in-memory source control\n"
                "Type 'help' for commands, 'exit' to quit",
                border_style="cyan",
            )
        )
        while self.running:
            try:
                line = console.input("\n[bold green]scribe>[/bold green] ").strip()
            except KeyboardInterrupt:
                console.print("\n[yellow]Use 'exit' to quit[/yellow]")
                continue
            except EOFError:
                break
            if line:
                self.execute(line)

    def execute(self, line: str) -> None:
        """Execute one command line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            console.print(f"[red]Parse error:[/red] {e}")
            return

        cmd, args = parts[0].lower(), parts[1:]
        handler = self.commands.get(cmd)
        if handler is None:
            console.print(f"[red]Unknown command:[/red] {cmd}")
            console.print("Type 'help' for available commands")
            return
        handler(args)

    def resolve_file(self, ref: str) -> Optional[FileRecord]:
        """Find a file by exact name or id prefix."""
        record = self.workspace.store.find_by_name(ref)
        if record is not None:
            return record
        matches = [f for f in self.workspace.files if f.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        console.print(f"[red]No such file:[/red] {ref}")
        return None

    def _require(self, args: List[str], count: int, usage: str) -> bool:
        if len(args) < count:
            console.print(f"[red]Usage:[/red] {usage}")
            return False
        return True

    # -- Commands ------------------------------------------------------------

    def cmd_help(self, args: List[str]) -> None:
        table = Table(
            title="Available Commands", show_header=True, header_style="bold magenta"
        )
        table.add_column("Command", style="cyan")
        table.add_column("Description", style="white")

        commands = [
            ("ls", "List files with their status"),
            ("new <name>", "Create a file and open it"),
            ("open <file>", "Make a file active"),
            ("cat [file]", "Show a file (active file by default)"),
            ("write <file> <text>", "Replace a file's content (\\n for newlines)"),
            ("append <file> <text>", "Append a line to a file"),
            ("rename <file> <name>", "Rename a file"),
            ("rm <file>", "Delete a file"),
            ("status", "Show staged and unstaged changes"),
            ("add <file>", "Stage a changed file"),
            ("add-all", "Stage every changed file"),
            ("reset <file>", "Unstage a file"),
            ("commit <message>", "Commit staged files"),
            ("log [n]", "Show commit history"),
            ("show <rev>", "Show a commit"),
            ("diff [rev [rev]]", "Diff HEAD against the working tree, or two commits"),
            ("push / pull", "Simulated remote sync"),
            ("keys", "List keyboard shortcuts"),
            ("bind <id> <keys>", "Change a keyboard shortcut"),
            ("exit", "Leave the shell"),
        ]
        for cmd, desc in commands:
            table.add_row(cmd, desc)
        console.print(table)

    def cmd_ls(self, args: List[str]) -> None:
        status = self.workspace.status()
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("", width=1)
        table.add_column("Name", style="cyan")
        table.add_column("Id", style="dim")
        table.add_column("Status")
        for record in self.workspace.files:
            active = "*" if record.id == self.workspace.active_file_id else ""
            state = status.status_of(record.id)
            label = state.value if state != FileStatus.UNCHANGED else ""
            if record.id in self.workspace.staging:
                label = f"{label} (staged)"
            table.add_row(active, record.name, record.id, label)
        console.print(table)

    def cmd_new(self, args: List[str]) -> None:
        record = self.workspace.create_file(" ".join(args))
        console.print(f"Created [cyan]{record.name}[/cyan] ({record.id})")

    def cmd_open(self, args: List[str]) -> None:
        if not self._require(args, 1, "open <file>"):
            return
        record = self.resolve_file(args[0])
        if record is not None and self.workspace.select_file(record.id):
            console.print(f"Opened [cyan]{record.name}[/cyan]")

    def cmd_cat(self, args: List[str]) -> None:
        record = self.resolve_file(args[0]) if args else self.workspace.active_file
        if record is None:
            return
        syntax = Syntax(record.content, "python", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=record.name, border_style="blue"))

    def cmd_write(self, args: List[str]) -> None:
        if not self._require(args, 2, "write <file> <text>"):
            return
        record = self.resolve_file(args[0])
        if record is not None:
            text = " ".join(args[1:]).replace("\\n", "\n")
            self.workspace.edit_file(record.id, text)

    def cmd_append(self, args: List[str]) -> None:
        if not self._require(args, 2, "append <file> <text>"):
            return
        record = self.resolve_file(args[0])
        if record is not None:
            content = record.content
            if content and not content.endswith("\n"):
                content += "\n"
            self.workspace.edit_file(record.id, content + " ".join(args[1:]) + "\n")

    def cmd_rename(self, args: List[str]) -> None:
        if not self._require(args, 2, "rename <file> <name>"):
            return
        record = self.resolve_file(args[0])
        if record is not None:
            self.workspace.rename_file(record.id, " ".join(args[1:]))

    def cmd_rm(self, args: List[str]) -> None:
        if not self._require(args, 1, "rm <file>"):
            return
        record = self.resolve_file(args[0])
        if record is not None and self.workspace.delete_file(record.id):
            console.print(f"Deleted [cyan]{record.name}[/cyan]")

    def cmd_status(self, args: List[str]) -> None:
        staged = self.workspace.staged_files()
        pending = self.workspace.pending_changes()
        status = self.workspace.status()

        console.print(f"On branch {self.workspace.settings.branch}")
        console.print("[bold]Staged changes:[/bold]")
        if not staged:
            console.print("  [dim]No staged changes[/dim]")
        for record in staged:
            console.print(f"  [green]{record.name}[/green]")
        console.print("[bold]Changes:[/bold]")
        if not pending:
            console.print("  [dim]No changes[/dim]")
        for record in pending:
            marker = status.status_of(record.id).marker
            console.print(f"  [yellow]{marker}[/yellow] {record.name}")

    def cmd_add(self, args: List[str]) -> None:
        if not self._require(args, 1, "add <file>"):
            return
        if args[0] == ".":
            self.cmd_add_all(args)
            return
        record = self.resolve_file(args[0])
        if record is not None and not self.workspace.stage(record.id):
            console.print(f"[dim]Nothing to stage for {record.name}[/dim]")

    def cmd_add_all(self, args: List[str]) -> None:
        count = self.workspace.stage_all()
        console.print(f"Staged {count} file(s)")

    def cmd_reset(self, args: List[str]) -> None:
        if not self._require(args, 1, "reset <file>"):
            return
        record = self.resolve_file(args[0])
        if record is not None:
            self.workspace.unstage(record.id)

    def cmd_commit(self, args: List[str]) -> None:
        message = " ".join(args)
        if self.workspace.settings.commit_delay > 0:
            console.print("[dim]Committing...[/dim]")
        asyncio.run(self.workspace.commit_async(message))

    def cmd_log(self, args: List[str]) -> None:
        max_count = int(args[0]) if args and args[0].isdigit() else None
        for commit in self.workspace.log(max_count):
            console.print(
                f"[yellow]{commit.short_hash}[/yellow] {commit.message} "
                f"[dim]({commit.author}, {commit.timestamp})[/dim]",
                highlight=False,
            )

    def cmd_show(self, args: List[str]) -> None:
        commit = self.workspace.resolve(args[0] if args else "HEAD")
        if commit is None:
            console.print(f"[red]Unknown revision:[/red] {args[0]}")
            return
        lines = [
            f"[bold]commit[/bold] {commit.hash}",
            f"Author: {commit.author}",
            f"Date:   {commit.timestamp}",
            "",
            f"    {commit.message}",
            "",
        ]
        lines.extend(f"  {f.name} ({f.id})" for f in commit.files)
        console.print("\n".join(lines), highlight=False)

    def cmd_diff(self, args: List[str]) -> None:
        if not args:
            diff = self.workspace.working_diff()
        else:
            diff = self.workspace.diff(args[0], args[1] if len(args) > 1 else "HEAD")
        if diff is not None:
            console.print(diff.format(include_content=True), markup=False, highlight=False)

    def cmd_push(self, args: List[str]) -> None:
        asyncio.run(self.workspace.push())

    def cmd_pull(self, args: List[str]) -> None:
        asyncio.run(self.workspace.pull())

    def cmd_keys(self, args: List[str]) -> None:
        table = Table(title="Keybindings", show_header=True, header_style="bold magenta")
        table.add_column("Id", style="dim")
        table.add_column("Action", style="cyan")
        table.add_column("Keys")
        for binding in self.keys.bindings:
            table.add_row(binding.id, binding.label, binding.keys)
        console.print(table)

    def cmd_bind(self, args: List[str]) -> None:
        if not self._require(args, 2, "bind <id> <keys>"):
            return
        try:
            self.keys.rebind(args[0], args[1])
        except KeyError:
            console.print(f"[red]Unknown binding:[/red] {args[0]}")

    def cmd_exit(self, args: List[str]) -> None:
        self.running = False


def _settings(author: Optional[str], fast: bool) -> WorkspaceConfig:
    update: Dict[str, object] = {}
    if author:
        update["author"] = author
    if fast:
        update.update(commit_delay=0.0, push_delay=0.0, pull_delay=0.0)
    return config.workspace.model_copy(update=update)


def _setup_logging(level: str) -> None:
    initialize_logging(
        log_dir=Path(config.logging.log_dir),
        level=level,
        enable_file_logging=config.logging.enable_file_logging,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
    )


@click.group()
def cli():
    """In-memory source control for a small set of text files."""
    pass


@cli.command()
@click.option("--author", help="Author recorded on commits")
@click.option("--fast", is_flag=True, help="Skip simulated latency")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Diagnostic log level (stderr)",
)
def shell(author: Optional[str], fast: bool, log_level: str):
    """Open an interactive shell over a fresh workspace."""
    _setup_logging(log_level)
    ScribeShell(_settings(author, fast)).run()


@cli.command()
@click.option("--author", help="Author recorded on commits")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Diagnostic log level (stderr)",
)
def demo(author: Optional[str], log_level: str):
    """Replay a scripted edit / stage / commit session."""
    _setup_logging(log_level)
    terminal = TerminalBuffer()
    terminal.subscribe(print_entry)
    workspace = Workspace(_settings(author, fast=True), sink=terminal)

    main = workspace.files[0]
    click.echo(f"Editing {main.name}")
    workspace.edit_file(main.id, main.content + 'print("edited")\n')
    click.echo(workspace.status().format(workspace.staging))
    workspace.stage(main.id)
    workspace.commit(f"update {main.name}")

    helper = workspace.create_file("helpers")
    click.echo(f"Created {helper.name}")
    click.echo(workspace.status().format(workspace.staging))
    workspace.stage(helper.id)
    workspace.commit(f"add {helper.name}")

    click.echo("Attempting a commit with nothing staged")
    workspace.commit("empty")

    click.echo("")
    for commit in workspace.log():
        click.echo(f"{commit.short_hash} {commit.message} ({len(commit.files)} files)")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
