"""Live console progress for an inventory run.

Render-only: the engine hands a progress dict to the callback on every
poll and this module turns it into a single status line.
"""

from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text


class ProgressLine:
    """Formats engine progress as ``Dirs:[n]  Files:[n] Exceptions:[n] ...``."""

    def render(self, progress: Dict[str, int]) -> Text:
        text = Text()
        text.append("Dirs:")
        text.append(f"[{progress.get('directories', 0)}]", style="cyan")
        text.append("  Files:")
        text.append(f"[{progress.get('files', 0)}]", style="green")
        text.append(" Exceptions:")
        exceptions = progress.get('exceptions', 0)
        text.append(f"[{exceptions}]", style="red" if exceptions else "dim")
        text.append(" ThreadCount:")
        text.append(f"[{progress.get('running', 0)}]", style="yellow")
        text.append(" Outstanding:")
        text.append(f"[{progress.get('outstanding', 0)}]", style="yellow")
        return text


@contextmanager
def live_progress(
    console: Optional[Console] = None,
    refresh_per_second: float = 10,
) -> Iterator[Callable[[Dict[str, int]], None]]:
    """Display a live progress line; yields the callback that updates it.

    Example:
        with live_progress() as update:
            inventory_tree(root, output_dir, progress_callback=update)
    """
    line = ProgressLine()
    console = console or Console(stderr=True)
    with Live(line.render({}), console=console,
              refresh_per_second=refresh_per_second, transient=False) as live:

        def update(progress: Dict[str, int]) -> None:
            live.update(line.render(progress))

        yield update
