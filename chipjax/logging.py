"""Console logging utilities for the CHIP-8 engine.

Provides a small leveled console logger used by the emulator for load/reset
messages and fatal errors, and a tqdm progress bar for long batch runs.
"""

import time
import sys
from typing import Callable, Optional, Tuple

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with level filtering and optional colors."""

    def __init__(
        self,
        name: str = "chipjax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        if log_level.upper() not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )
        self.log_level = log_level.upper()

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


logger = ConsoleLogger()


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: str = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build a tqdm progress bar for a host-side loop of ``n`` iterations.

    Returns:
        ``(update, close)``: call ``update(iter_num)`` once per iteration and
        ``close()`` when the loop ends, normally or not.
    """
    if desc is None:
        desc = f"Executing ({n:,} instructions)"

    for kwarg in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(kwarg, None)

    if print_rate is None:
        print_rate = max(1, min(n // 20, 50))
    else:
        print_rate = max(1, min(print_rate, n))

    bar = tqdm(total=n, desc=desc, unit="instr", **kwargs)

    def _update_progress_bar(iter_num):
        done = iter_num + 1
        if done % print_rate == 0 or done == n:
            bar.update(done - bar.n)

    def _close_progress_bar():
        bar.close()

    return _update_progress_bar, _close_progress_bar
