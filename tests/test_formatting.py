from datetime import date, datetime

from healthdoc.commons.formatting import (
    StatusTier,
    classify_status,
    escape,
    format_currency,
    format_date,
    format_number,
    title_case,
)


def test_escape_replaces_all_metacharacters():
    assert escape("<a href=\"x\">Tom & Jerry's</a>") == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#x27;s&lt;/a&gt;"
    )
    assert escape(None) == ""
    assert escape(42) == "42"


def test_title_case_keeps_acronyms():
    assert title_case("ecg_results") == "ECG Results"
    assert title_case("patient_dob") == "Patient Dob"
    assert title_case("opd_number") == "OPD Number"
    assert title_case("heartRate") == "Heart Rate"
    assert title_case("") == ""


def test_format_date_variants():
    assert format_date("2026-03-05") == "5 Mar 2026"
    assert format_date("2026-03-05T10:30:00Z") == "5 Mar 2026"
    assert format_date(date(2025, 12, 25)) == "25 Dec 2025"
    assert format_date(datetime(2025, 1, 2, 8, 0)) == "2 Jan 2025"


def test_format_date_never_raises():
    assert format_date(None) == ""
    assert format_date("") == ""
    assert format_date("not a date") == ""
    assert format_date("2026-13-45") == ""


def test_format_number_and_currency():
    assert format_number(72.0) == "72"
    assert format_number(98.6) == "98.6"
    assert format_currency(1500) == "₹1,500"
    assert format_currency(1500.5) == "₹1,500.50"
    assert format_currency(None) == ""
    assert format_currency("abc") == ""


def test_classify_status_exact_and_words():
    assert classify_status("normal") is StatusTier.normal
    assert classify_status("High") is StatusTier.abnormal
    assert classify_status("pending") is StatusTier.abnormal
    assert classify_status("failed") is StatusTier.critical
    assert classify_status("critically low") is StatusTier.critical
    assert classify_status("slightly high") is StatusTier.abnormal


def test_classify_status_fails_open():
    assert classify_status("") is StatusTier.normal
    assert classify_status(None) is StatusTier.normal
    assert classify_status("unheard-of") is StatusTier.normal


def test_classify_status_ignores_negated_words():
    assert classify_status("non-critical") is StatusTier.normal
    assert classify_status("not high") is StatusTier.normal
    assert classify_status("no abnormality, high glucose") is StatusTier.abnormal
    assert classify_status("cancelled") is StatusTier.normal
