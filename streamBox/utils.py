import functools
import platform
import random
import subprocess
import time
import webbrowser
from datetime import datetime, timezone

from streamBox.settings import LOG_PATH


def log_debug(message: str) -> None:
    """Append timestamped message to the log file."""
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().isoformat(timespec="seconds")
    entry = f"[{ts}] {message}\n"
    with LOG_PATH.open("a", encoding="utf-8") as f:
        f.write(entry)


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, `Z` suffixed."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_iso(stamp: str) -> datetime:
    """Parse timestamps written by `utc_now_iso` (and plain ISO strings).
    Naive values are taken as UTC."""
    if stamp.endswith("Z"):
        stamp = stamp[:-1] + "+00:00"
    dt = datetime.fromisoformat(stamp)
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def open_url_host_browser(url: str) -> None:
    """Opens *url* with host OS default browser (WSL-aware)."""
    if "microsoft-standard" in platform.uname().release.lower():
        subprocess.Popen(["powershell.exe", "-c", f"Start-Process '{url}'"])
    else:
        webbrowser.open(url)


def throttle(min_delay: float = 1.0):
    """
    Decorator that sleeps `min_delay ±0.3 s` between *network* calls on the
    same function.
    """
    def wrap(fn):
        last_hit = 0.0
        @functools.wraps(fn)
        def inner(*a, **kw):
            nonlocal last_hit
            wait = min_delay - (time.time() - last_hit)
            if wait > 0:
                time.sleep(wait + random.uniform(0, 0.3))
            out = fn(*a, **kw)
            last_hit = time.time()
            return out
        return inner
    return wrap
