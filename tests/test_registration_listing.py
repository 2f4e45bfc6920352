import pytest

from eventdesk.services.registration_listing import normalize_registrations, summarize_registrations

from .conftest import registration_payload


def sample(event_id="evt-1"):
    return [
        registration_payload(event_id, "rsvp_yes", 1),
        registration_payload(event_id, "waitlist", 2, waitlistPosition=1),
    ]


@pytest.mark.parametrize(
    "wrap",
    [
        lambda items: items,
        lambda items: {"data": items},
        lambda items: {"registrations": items},
        lambda items: {"registrations": {item["id"]: item for item in items}},
    ],
    ids=["array", "data", "registrations-array", "registrations-map"],
)
def test_all_known_shapes_normalize_to_the_same_list(wrap):
    result = normalize_registrations(wrap(sample()))

    assert result.warning is None
    assert [r.id for r in result.items] == ["reg-1", "reg-2"]
    assert result.items[1].waitlist_position == 1


def test_keyed_map_without_ids_uses_keys():
    items = sample()
    keyed = {"a": {k: v for k, v in items[0].items() if k != "id"}, "b": {k: v for k, v in items[1].items() if k != "id"}}

    result = normalize_registrations({"registrations": keyed})

    assert [r.id for r in result.items] == ["a", "b"]
    summary = summarize_registrations(result.items)
    assert summary == {"rsvpYes": 1, "rsvpMaybe": 0, "presaleRequests": 0, "waitlist": 1, "total": 2}


def test_none_is_an_empty_list_without_warning():
    result = normalize_registrations(None)
    assert result.items == []
    assert result.warning is None


@pytest.mark.parametrize("payload", ["<html>oops</html>", 42, {"unexpected": []}, {"registrations": "nope"}])
def test_unknown_shapes_become_empty_with_warning(payload):
    result = normalize_registrations(payload)
    assert result.items == []
    assert result.warning


def test_unreadable_items_are_dropped_with_warning():
    payload = sample() + [{"id": "broken"}, "garbage"]

    result = normalize_registrations(payload)

    assert [r.id for r in result.items] == ["reg-1", "reg-2"]
    assert "2 registration(s)" in result.warning


def test_summary_counts_each_kind():
    payload = [
        registration_payload("evt-1", kind, i)
        for i, kind in enumerate(["rsvp_yes", "rsvp_yes", "rsvp_maybe", "presale_request", "waitlist"])
    ]
    summary = summarize_registrations(normalize_registrations(payload).items)
    assert summary == {"rsvpYes": 2, "rsvpMaybe": 1, "presaleRequests": 1, "waitlist": 1, "total": 5}
