# ═══════════════════════════════════════════════════════════════════
# log.py - Logging setup routed through rich
# ═══════════════════════════════════════════════════════════════════

import logging
from rich.logging import RichHandler

def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the root logger once; later calls only adjust the level"""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Prevent duplicate handlers
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)

    return root
