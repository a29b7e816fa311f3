from datetime import datetime, timedelta, timezone

import pytest

from app.services.accounts.presence import calculate_status_indicator, format_last_seen, format_seniority

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def ago(**kwargs):
    return NOW - timedelta(**kwargs)


@pytest.mark.parametrize("last_seen,status,expected", [
    (ago(seconds=30), "online", ("Online", "Online")),
    (ago(seconds=90), "away", ("Away", "Away")),
    (ago(minutes=1), None, ("Online", "Online")),
    (ago(minutes=2), "online", (None, "Last seen 2 minutes ago")),
    (ago(hours=1), "online", (None, "Last seen 1 hour ago")),
    (ago(hours=5, minutes=20), "online", (None, "Last seen 5 hours ago")),
    (ago(hours=30), "online", (None, "Last seen yesterday")),
    (ago(days=5), "online", (None, "Last seen on Mar 5, 2026")),
])
def test_status_indicator(last_seen, status, expected):
    assert calculate_status_indicator(True, last_seen, status, now=NOW) == expected


def test_hidden_or_unknown_presence():
    assert calculate_status_indicator(False, ago(seconds=10), "online", now=NOW) == (None, "Active recently")
    assert calculate_status_indicator(True, None, "online", now=NOW) == (None, "Active recently")


def test_naive_timestamps_are_treated_as_utc():
    naive = (NOW - timedelta(minutes=10)).replace(tzinfo=None)
    assert calculate_status_indicator(True, naive, "online", now=NOW) == (None, "Last seen 10 minutes ago")


def test_format_last_seen():
    assert format_last_seen(None, now=NOW) == "Active recently"
    assert format_last_seen(ago(seconds=5), now=NOW) == "Online"
    assert format_last_seen(ago(minutes=1, seconds=59), now=NOW) == "Online"
    assert format_last_seen(ago(minutes=45), now=NOW) == "45 minutes ago"
    assert format_last_seen(ago(hours=2), now=NOW) == "2 hours ago"
    assert format_last_seen(ago(hours=47), now=NOW) == "yesterday"
    assert format_last_seen(ago(days=40), now=NOW) == "Jan 29, 2026"


@pytest.mark.parametrize("value,label", [
    ("senior", "Senior"),
    ("vp_c_level", "VP / C-Level"),
    ("mid", "Mid-Level"),
    ("intern", "Intern"),
    (None, ""),
    ("", ""),
])
def test_format_seniority(value, label):
    assert format_seniority(value) == label
