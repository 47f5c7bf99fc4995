"""
Tests for the fetch cascade (identity -> search -> repo scan) and the
detached worker thread that delivers its outcome.
"""

from unittest.mock import patch

import requests

from clock_core import worker
from clock_core.mailbox import ResultMailbox
from clock_core.models import FetchOutcome, PullRequestRef


def _search_body(*pairs):
    return {"items": [{"title": t, "html_url": u} for t, u in pairs]}


# ============================================================================
# Identity stage
# ============================================================================

class TestIdentityStage:

    def test_rejected_credential_is_disconnected(self, github, make_response):
        github.add("/user", make_response(401))

        outcome = worker.run_cascade("bad")

        assert outcome == FetchOutcome(connected=False, items=())
        assert github.paths() == ["/user"]

    def test_missing_login_is_disconnected(self, github, make_response):
        github.add("/user", make_response(200, {"message": "ok but odd"}))

        assert worker.run_cascade("tok").connected is False

    def test_transport_failure_is_disconnected(self, github):
        github.add("/user", requests.ConnectionError("offline"))

        outcome = worker.run_cascade("tok")

        assert outcome.connected is False
        assert outcome.items == ()


# ============================================================================
# Search stage
# ============================================================================

class TestSearchStage:

    def test_search_hits_are_final_in_server_order(self, github, make_response):
        github.add("/user", make_response(200, {"login": "octo"}))
        github.add("/search/issues", make_response(200, _search_body(
            ("Second newest", "https://github.com/a/b/pull/2"),
            ("Older", "https://github.com/a/b/pull/1"),
        )))

        outcome = worker.run_cascade("tok")

        assert outcome.connected is True
        assert outcome.items == (
            PullRequestRef("Second newest", "https://github.com/a/b/pull/2"),
            PullRequestRef("Older", "https://github.com/a/b/pull/1"),
        )
        assert "/user/repos" not in github.paths()

    def test_search_failure_keeps_connection_and_skips_fallback(self, github, make_response):
        github.add("/user", make_response(200, {"login": "octo"}))
        github.add("/search/issues", make_response(500))

        outcome = worker.run_cascade("tok")

        assert outcome == FetchOutcome(connected=True, items=())
        assert github.paths() == ["/user", "/search/issues"]

    def test_search_malformed_body_degrades_like_failure(self, github, make_response):
        github.add("/user", make_response(200, {"login": "octo"}))
        github.add("/search/issues", make_response(200, bad_json=True))

        outcome = worker.run_cascade("tok")

        assert outcome == FetchOutcome(connected=True, items=())
        assert "/user/repos" not in github.paths()


# ============================================================================
# Repository fallback
# ============================================================================

class TestRepoFallback:

    def _setup_identity_and_empty_search(self, github, make_response):
        github.add("/user", make_response(200, {"login": "octo"}))
        github.add("/search/issues", make_response(200, {"items": []}))

    def test_merges_across_repos_newest_first(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [{"full_name": "acme/r1"}, {"full_name": "acme/r2"}]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("octo", "R1 newest", "2024-01-03T10:00:00Z", 1, "acme/r1"),
            pr_payload("someone", "Not mine", "2024-01-04T10:00:00Z", 2, "acme/r1"),
            pr_payload("octo", "R1 oldest", "2024-01-01T10:00:00Z", 3, "acme/r1"),
        ]))
        github.add("/repos/acme/r2/pulls", make_response(200, [
            pr_payload("octo", "R2 middle", "2024-01-02T10:00:00Z", 7, "acme/r2"),
        ]))

        outcome = worker.run_cascade("tok")

        assert outcome.connected is True
        assert [ref.title for ref in outcome.items] == ["R1 newest", "R2 middle", "R1 oldest"]
        assert outcome.items[1].url == "https://github.com/acme/r2/pull/7"

    def test_keeps_only_three(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [{"full_name": "acme/r1"}]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("octo", f"PR {day}", f"2024-01-0{day}T00:00:00Z", day, "acme/r1")
            for day in range(1, 6)
        ]))

        outcome = worker.run_cascade("tok")

        assert [ref.title for ref in outcome.items] == ["PR 5", "PR 4", "PR 3"]

    def test_failing_repo_is_skipped(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [
            {"full_name": "acme/r1"}, {"full_name": "acme/r2"}, {"full_name": "acme/r3"},
        ]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("octo", "From r1", "2024-01-01T00:00:00Z", 1, "acme/r1"),
        ]))
        github.add("/repos/acme/r2/pulls", make_response(500))
        github.add("/repos/acme/r3/pulls", make_response(200, [
            pr_payload("octo", "From r3", "2024-01-05T00:00:00Z", 1, "acme/r3"),
        ]))

        outcome = worker.run_cascade("tok")

        assert outcome.connected is True
        assert [ref.title for ref in outcome.items] == ["From r3", "From r1"]
        assert "/repos/acme/r3/pulls" in github.paths()

    def test_repo_listing_failure_is_connected_empty(self, github, make_response):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(403))

        assert worker.run_cascade("tok") == FetchOutcome(connected=True, items=())

    def test_no_matches_is_still_connected(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [{"full_name": "acme/r1"}]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("someone-else", "Theirs", "2024-01-01T00:00:00Z"),
        ]))

        assert worker.run_cascade("tok") == FetchOutcome(connected=True, items=())

    def test_equal_timestamps_keep_encounter_order(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [{"full_name": "acme/r1"}, {"full_name": "acme/r2"}]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("octo", "first seen", "2024-02-01T00:00:00Z", 1, "acme/r1"),
        ]))
        github.add("/repos/acme/r2/pulls", make_response(200, [
            pr_payload("octo", "second seen", "2024-02-01T00:00:00Z", 1, "acme/r2"),
        ]))

        outcome = worker.run_cascade("tok")

        assert [ref.title for ref in outcome.items] == ["first seen", "second seen"]

    def test_truncated_timestamps_still_sort_newest_first(self, github, make_response, pr_payload):
        self._setup_identity_and_empty_search(github, make_response)
        github.add("/user/repos", make_response(200, [{"full_name": "acme/r1"}, {"full_name": "acme/r2"}]))
        github.add("/repos/acme/r1/pulls", make_response(200, [
            pr_payload("octo", "R1 first", "2024-01-03T..", 1, "acme/r1"),
            pr_payload("octo", "R1 second", "2024-01-01T..", 2, "acme/r1"),
        ]))
        github.add("/repos/acme/r2/pulls", make_response(200, [
            pr_payload("octo", "R2", "2024-01-02T..", 1, "acme/r2"),
        ]))

        outcome = worker.run_cascade("tok")

        assert outcome.connected is True
        assert [ref.title for ref in outcome.items] == ["R1 first", "R2", "R1 second"]


# ============================================================================
# Sort key
# ============================================================================

class TestRecencyKey:

    def test_matches_string_order_for_utc_timestamps(self):
        stamps = ["2024-01-01T00:00:00Z", "2024-01-03T00:00:00Z", "2024-01-02T12:30:00Z"]
        by_key = sorted(stamps, key=worker.recency_key, reverse=True)
        assert by_key == sorted(stamps, reverse=True)

    def test_compares_instants_across_offsets(self):
        # 01:00+02:00 is 23:00Z the previous day
        assert worker.recency_key("2024-01-02T01:00:00+02:00") < worker.recency_key("2024-01-01T23:30:00Z")

    def test_unparseable_ranks_last(self):
        assert worker.recency_key("") < worker.recency_key("1999-01-01T00:00:00Z")
        assert worker.recency_key("2024-01-03T..") < worker.recency_key("1999-01-01T00:00:00Z")

    def test_unparseable_values_compare_as_strings(self):
        assert worker.recency_key("2024-01-01T..") < worker.recency_key("2024-01-02T..")
        assert worker.recency_key("") < worker.recency_key("yesterday")


# ============================================================================
# Background thread
# ============================================================================

class TestSpawnFetch:

    def test_delivers_exactly_one_outcome(self):
        mailbox = ResultMailbox()
        expected = FetchOutcome(connected=True, items=(PullRequestRef("t", "u"),))

        with patch.object(worker, "run_cascade", return_value=expected) as cascade:
            thread = worker.spawn_fetch("tok", mailbox)
            thread.join(timeout=5)

        cascade.assert_called_once_with("tok")
        assert thread.daemon is True
        assert mailbox.try_receive() == expected
        assert mailbox.try_receive() is None

    def test_crash_still_delivers_disconnected(self):
        mailbox = ResultMailbox()

        with patch.object(worker, "run_cascade", side_effect=RuntimeError("boom")):
            thread = worker.spawn_fetch("tok", mailbox)
            thread.join(timeout=5)

        assert mailbox.try_receive() == FetchOutcome.disconnected()
