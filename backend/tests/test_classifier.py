"""Tests for annotation cleaning and per-country outage classification."""

from datetime import datetime, timezone

from outage_relay.countries.definitions import KNOWN_COUNTRIES
from outage_relay.schemas.outage import OutageAnnotation
from outage_relay.services.classifier import classify, count_active, parse_annotations

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
KNOWN = frozenset({"US", "FR", "DE", "BR"})


def _annotation(**kwargs) -> OutageAnnotation:
    defaults = {
        "outage": True,
        "locations": ["US"],
        "outage_type": "NATIONWIDE",
        "outage_cause": "POWER_OUTAGE",
        "start_date": "2026-10-19T08:00:00Z",
    }
    defaults.update(kwargs)
    return OutageAnnotation(**defaults)


# --- classify ---

def test_empty_annotations_all_normal():
    result = classify([], KNOWN, NOW)
    assert set(result) == KNOWN
    assert all(s.status == "NORMAL" for s in result.values())
    assert all(s.severity is None and s.source is None for s in result.values())


def test_bundled_countries_all_present():
    result = classify([], KNOWN_COUNTRIES, NOW)
    assert set(result) == KNOWN_COUNTRIES
    assert len(KNOWN_COUNTRIES) > 240


def test_outage_false_ignored():
    result = classify([_annotation(outage=False, locations=["US", "FR"])], KNOWN, NOW)
    assert result["US"].status == "NORMAL"
    assert result["FR"].status == "NORMAL"


def test_non_list_locations_ignored():
    result = classify([_annotation(locations=None)], KNOWN, NOW)
    assert count_active(result) == 0


def test_ended_outage_excluded():
    ended = _annotation(end_date=datetime(2026, 10, 19, 11, 59, tzinfo=timezone.utc))
    result = classify([ended], KNOWN, NOW)
    assert result["US"].status == "NORMAL"


def test_future_end_date_kept():
    ongoing = _annotation(end_date=datetime(2026, 10, 19, 13, 0, tzinfo=timezone.utc))
    result = classify([ongoing], KNOWN, NOW)
    assert result["US"].status == "OUTAGE"


def test_end_date_equal_to_now_kept():
    result = classify([_annotation(end_date=NOW)], KNOWN, NOW)
    assert result["US"].status == "OUTAGE"


def test_nationwide_beats_regional_either_order():
    nationwide = _annotation(outage_type="NATIONWIDE", outage_cause="GOVERNMENT_DIRECTED")
    regional = _annotation(outage_type="REGIONAL", outage_cause="WEATHER")
    for order in ([nationwide, regional], [regional, nationwide]):
        us = classify(order, KNOWN, NOW)["US"]
        assert us.status == "OUTAGE"
        assert us.severity == "HIGH"
        assert us.scope == "NATIONWIDE"
        assert us.cause == "GOVERNMENT_DIRECTED"


def test_regional_only_degraded():
    regional = _annotation(locations=["FR"], outage_type="REGIONAL", outage_cause="WEATHER",
                           start_date="2026-10-19T06:30:00Z")
    fr = classify([regional], KNOWN, NOW)["FR"]
    assert fr.status == "DEGRADED"
    assert fr.severity == "MEDIUM"
    assert fr.scope == "REGIONAL"
    assert fr.cause == "WEATHER"
    assert fr.since == "2026-10-19T06:30:00Z"
    assert fr.source == ["outages"]


def test_other_outage_type_stays_normal():
    result = classify([_annotation(locations=["DE"], outage_type="NETWORK")], KNOWN, NOW)
    assert result["DE"].status == "NORMAL"


def test_first_of_same_type_wins():
    first = _annotation(outage_cause="CABLE_CUT", start_date="2026-10-19T01:00:00Z")
    second = _annotation(outage_cause="POWER_OUTAGE", start_date="2026-10-19T02:00:00Z")
    us = classify([first, second], KNOWN, NOW)["US"]
    assert us.cause == "CABLE_CUT"
    assert us.since == "2026-10-19T01:00:00Z"


def test_unknown_and_malformed_locations_skipped():
    annotation = _annotation(locations=["XX", 42, None, {"code": "US"}, "BR"])
    result = classify([annotation], KNOWN, NOW)
    assert set(result) == KNOWN
    assert result["BR"].status == "OUTAGE"
    assert result["US"].status == "NORMAL"


def test_annotation_covers_multiple_countries():
    result = classify([_annotation(locations=["US", "DE"], outage_type="REGIONAL")], KNOWN, NOW)
    assert result["US"].status == "DEGRADED"
    assert result["DE"].status == "DEGRADED"
    assert count_active(result) == 2


# --- parse_annotations ---

def test_parse_radar_annotations():
    raw = [
        {
            "id": "1",
            "outage": {"outageType": "REGIONAL", "outageCause": "WEATHER"},
            "locations": ["FR"],
            "startDate": "2026-10-19T06:00:00Z",
            "endDate": "2026-10-20T06:00:00Z",
        },
        {
            "outage": {"outageType": "NATIONWIDE"},
            "locations": "US",
            "startDate": "2026-10-19T07:00:00Z",
        },
    ]
    parsed = parse_annotations(raw)
    assert len(parsed) == 2
    assert parsed[0].outage is True
    assert parsed[0].outage_type == "REGIONAL"
    assert parsed[0].outage_cause == "WEATHER"
    assert parsed[0].end_date == datetime(2026, 10, 20, 6, 0, tzinfo=timezone.utc)
    assert parsed[1].locations is None
    assert parsed[1].outage_cause is None
    assert parsed[1].end_date is None


def test_parse_skips_non_objects():
    assert parse_annotations([None, "x", 3, []]) == []
    assert parse_annotations(None) == []
    assert parse_annotations({"annotations": []}) == []


def test_parse_missing_outage_is_false():
    parsed = parse_annotations([{"locations": ["US"]}, {"outage": None, "locations": ["US"]}])
    assert [a.outage for a in parsed] == [False, False]
    assert classify(parsed, KNOWN, NOW)["US"].status == "NORMAL"


def test_parse_unparseable_end_date_treated_as_open():
    parsed = parse_annotations([{
        "outage": {"outageType": "NATIONWIDE"},
        "locations": ["US"],
        "endDate": "not-a-date",
    }])
    assert parsed[0].end_date is None
    assert classify(parsed, KNOWN, NOW)["US"].status == "OUTAGE"


def test_parse_naive_end_date_assumed_utc():
    parsed = parse_annotations([{
        "outage": {"outageType": "NATIONWIDE"},
        "locations": ["US"],
        "endDate": "2026-10-19T11:00:00",
    }])
    assert parsed[0].end_date == datetime(2026, 10, 19, 11, 0, tzinfo=timezone.utc)
    assert classify(parsed, KNOWN, NOW)["US"].status == "NORMAL"


def test_naive_now_compared_as_utc():
    ended = _annotation(end_date=datetime(2026, 1, 1, tzinfo=timezone.utc))
    ongoing = _annotation(locations=["FR"], end_date=datetime(2026, 10, 20, tzinfo=timezone.utc))
    result = classify([ended, ongoing], KNOWN, datetime(2026, 10, 19))
    assert result["US"].status == "NORMAL"
    assert result["FR"].status == "OUTAGE"


def test_naive_end_date_on_model_compared_as_utc():
    result = classify([_annotation(end_date=datetime(2026, 10, 19, 11, 0))], KNOWN, NOW)
    assert result["US"].status == "NORMAL"
