"""
Entry point, headless --once mode, and auto-restart wrapper.
"""

import argparse
import sys
import time

from .constants import CLOCK_VERSION
from .config import log, safe_print, setup_logging, load_config, mask_credential
from .credentials import load_credential
from .worker import run_cascade
from . import api
from . import http_client


def fetch_once(config=None):
    """Run one cascade synchronously and print it. Returns an exit code."""
    config = config or {}
    api.set_base_url(config.get("apiBaseUrl"))

    credential = load_credential()
    if not credential:
        safe_print("GitHub: disconnected (no token)")
        return 1

    log.info("One-shot fetch with %s", mask_credential(credential))
    outcome = run_cascade(credential)
    safe_print(f"GitHub: {outcome.status.value}")
    for ref in outcome.items:
        safe_print(f"  {ref.title}\n    {ref.url}")
    return 0 if outcome.connected else 1


def main(argv=None):
    """Primary entry point."""
    parser = argparse.ArgumentParser(prog="commit-clock", description="Desktop clock with open PRs.")
    parser.add_argument("--once", action="store_true",
                        help="fetch pull requests once, print them, and exit")
    parser.add_argument("--version", action="version", version=f"commit-clock {CLOCK_VERSION}")
    args = parser.parse_args(argv)

    setup_logging()
    config = load_config() or {}

    if args.once:
        return fetch_once(config)

    run_with_auto_restart(config)
    return 0


def run_with_auto_restart(config):
    """
    Wrapper that restarts the widget on crash.
    Crash counter resets if the widget ran for 2+ minutes (not a boot-loop).
    """
    from .app import ClockApp

    crash_count = 0
    crash_window = 120
    max_rapid_crashes = 10

    while True:
        start_time = time.time()
        try:
            ClockApp(config).run()
            break
        except KeyboardInterrupt:
            safe_print("\nStopped by user.")
            break
        except Exception as e:
            elapsed = time.time() - start_time
            log.error("Widget crashed after %.0fs: %s", elapsed, e, exc_info=True)

            if elapsed > crash_window:
                crash_count = 0
            crash_count += 1

            if crash_count >= max_rapid_crashes:
                log.error("Too many rapid crashes (%d). Giving up.", crash_count)
                raise

            wait = min(5 * crash_count, 30)
            log.info("Restarting in %ds (crash %d)...", wait, crash_count)
            time.sleep(wait)

            http_client.http = http_client.reset_session(http_client.http)


if __name__ == "__main__":
    sys.exit(main())
