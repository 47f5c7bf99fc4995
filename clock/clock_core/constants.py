"""
Constants, intervals, GitHub API limits, and theme colors.
"""

CLOCK_VERSION = "0.3.0"

# ─── Fetch cadence ───────────────────────────────────────────────
FETCH_INTERVAL_SEC = 300       # Automatic refresh every 5 minutes
FRAME_INTERVAL_MS = 200        # Render loop tick (poll mailbox + redraw)

# ─── GitHub API ──────────────────────────────────────────────────
API_BASE_URL = "https://api.github.com"
API_TIMEOUT_SEC = 4            # Per request; a cycle is sequential so worst case is 4s x (2 + repos)
USER_AGENT = "commit-clock"
ACCEPT_HEADER = "application/vnd.github+json"

MAX_ITEMS = 3                  # PRs shown on the widget
REPO_LIMIT = 20                # Repositories scanned by the fallback
PULLS_PER_REPO = 10            # Open PRs requested per repository
REPO_AFFILIATION = "owner,collaborator,organization_member"

# ─── Credential sources (checked in order) ───────────────────────
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "CHRONO_GITHUB_TOKEN")
TOKEN_FILE_NAME = "token"

# ─── Theme ───────────────────────────────────────────────────────
THEME = {
    "bg":            "#0f1214",   # window background
    "inactive":      "#1f2126",   # idle button / separators
    "active":        "#33d9d1",   # clock digits
    "text_primary":  "#f1f5f9",
    "text_muted":    "#94a3b8",
    "jira":          "#fbbf24",   # issue key badge
    "connected":     "#22c55e",
    "disconnected":  "#ef4444",
    "unknown":       "#64748b",
}

FONT_FAMILY = "Courier"
