"""Rich terminal reporter: status table, content views, descriptors."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitoscope.git.models import BlobInfo, CommitInfo, ReferenceInfo, TreeInfo
from gitoscope.status.models import FileStatus, StatusMap

_DIFF_STYLE = {
    "untracked": "bold black on bright_cyan",
    "new": "bold white on green",
    "modified": "bold black on yellow",
    "deleted": "bold white on red",
}


def _pill(label: str) -> Text:
    if not label:
        return Text("-", style="dim")
    return Text(f" {label.upper()} ", style=_DIFF_STYLE.get(label, ""))


def _presence(value: bool) -> Text:
    return Text("✓", style="green") if value else Text("✗", style="red")


def _is_clean(status: FileStatus) -> bool:
    return not status.diff_string and not status.diff_cached_string


def render_status(status: StatusMap, *, console: Console, show_clean: bool = False) -> None:
    """Print the status map as a table. Clean paths are hidden unless asked for."""
    paths = sorted(p for p, s in status.items() if show_clean or not _is_clean(s))

    if not paths:
        console.print("[bold green]Working copy, index, and HEAD agree.[/bold green]")
        console.print(f"[dim]Tracked files:[/dim] {len(status)}")
        return

    table = Table(show_lines=False, title_style="bold", border_style="dim")
    table.add_column("Path", style="magenta")
    table.add_column("Tree", justify="center")
    table.add_column("Index", justify="center")
    table.add_column("Working", justify="center")
    table.add_column("Staged", justify="center", min_width=10)
    table.add_column("Unstaged", justify="center", min_width=10)

    for path in paths:
        st = status[path]
        table.add_row(
            path,
            _presence(st.is_in_tree),
            _presence(st.is_in_cache),
            _presence(st.is_in_working_copy),
            _pill(st.diff_cached_string),
            _pill(st.diff_string),
        )

    console.print(table)
    console.print(f"[dim]Paths:[/dim] {len(status)}  [dim]Changed:[/dim] {sum(1 for s in status.values() if not _is_clean(s))}")


def _when(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def render_commit(commit: CommitInfo, *, console: Console) -> None:
    console.print(f"[bold yellow]commit {commit.id}[/bold yellow]")
    console.print(f"[dim]tree[/dim]      {commit.tree_id}")
    for parent in commit.parents:
        console.print(f"[dim]parent[/dim]    {parent}")
    console.print(f"[dim]author[/dim]    {commit.author.name} <{commit.author.email}>  {_when(commit.author.timestamp)}")
    console.print(f"[dim]committer[/dim] {commit.committer.name} <{commit.committer.email}>  {_when(commit.committer.timestamp)}")
    console.print()
    console.print(Text(commit.message.rstrip("\n")))


def render_tree(tree: TreeInfo, *, console: Console) -> None:
    table = Table(title=f"tree {tree.id}", title_style="bold", border_style="dim")
    table.add_column("Mode", style="dim")
    table.add_column("Type")
    table.add_column("Id", style="yellow")
    table.add_column("Name", style="magenta")
    for entry in tree.entries:
        name = entry.name + "/" if entry.is_tree else entry.name
        table.add_row(entry.mode, entry.type, entry.id, name)
    console.print(table)


def render_blob(blob: BlobInfo, *, console: Console) -> None:
    console.print(f"[dim]blob {blob.id} ({blob.size} bytes)[/dim]")
    if blob.is_binary:
        console.print("[yellow]Binary content not shown.[/yellow]")
        return
    console.print(Text(blob.content), end="")


def render_references(refs: List[ReferenceInfo], *, console: Console) -> None:
    table = Table(title_style="bold", border_style="dim")
    table.add_column("Reference", style="cyan")
    table.add_column("Target", style="yellow")
    for ref in refs:
        name = Text(ref.name, style="bold" if ref.is_head else "")
        if ref.symbolic_target:
            name.append(f" → {ref.symbolic_target}", style="dim")
        table.add_row(name, ref.target or "-")
    console.print(table)
