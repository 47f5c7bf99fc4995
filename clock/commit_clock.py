"""
commit-clock - Desktop Clock Widget
===================================
A pixel clock that also shows up to three of your open GitHub pull
requests, refreshed every 5 minutes in the background.

The token is read from GITHUB_TOKEN, CHRONO_GITHUB_TOKEN, a local .env
file, or ~/.config/chrono/token.

Usage:
    python commit_clock.py          # start the widget
    python commit_clock.py --once   # print PRs and exit
"""

import sys

from clock_core.runner import main

if __name__ == "__main__":
    sys.exit(main())
