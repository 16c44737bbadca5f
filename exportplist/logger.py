from rich.console import Console
from functools import lru_cache


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Console shared by the export commands; all diagnostics go through it."""
    return Console()
