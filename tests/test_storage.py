"""
Pytest tests for the in-memory report store.
"""

from repo_review.core.storage import InMemoryReportStore, report_key


def test_put_and_get_returns_copies():
    store = InMemoryReportStore()
    report = {"status": "completed", "suggestions": []}
    store.put("o/r", report)

    fetched = store.get("o/r")
    fetched["suggestions"].append("mutated")

    assert store.get("o/r") == {"status": "completed", "suggestions": []}
    assert store.get("missing/repo") is None


def test_replace_is_compare_and_set():
    """
    A replace with a stale revision is rejected; the current revision wins.
    """
    store = InMemoryReportStore()
    first = store.put("o/r", {"status": "pending", "n": 1})
    second = store.put("o/r", {"status": "pending", "n": 2})

    assert not store.replace("o/r", first, {"status": "completed", "n": 1})
    assert store.replace("o/r", second, {"status": "completed", "n": 2})
    assert store.get("o/r") == {"status": "completed", "n": 2}
    assert not store.replace("other/repo", second, {}), "Unknown keys cannot be replaced"


def test_list_reports_most_recent_first():
    store = InMemoryReportStore()
    store.put("a/a", {"n": "a"})
    store.put("b/b", {"n": "b"})
    store.put("a/a", {"n": "a2"})

    assert store.list_reports() == [{"n": "a2"}, {"n": "b"}]
    assert store.list_reports(limit=1, offset=1) == [{"n": "b"}]


def test_report_key_is_case_insensitive():
    assert report_key("OctoCat", "Hello-World") == "octocat/hello-world"
