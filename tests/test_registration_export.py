import csv
import io
from datetime import datetime

from eventdesk import schemas
from eventdesk.services.registration_export import CSV_HEADER, build_csv, export_filename


def make_registration(index, registration_type="rsvp_yes", **overrides):
    data = {
        "id": f"reg-{index}",
        "event_id": "evt-1",
        "name": f"Guest {index}",
        "email": f"guest{index}@example.com",
        "registration_type": registration_type,
        "created_at": datetime(2026, 10, 1, 18, index, 0),
    }
    data.update(overrides)
    return schemas.Registration(**data)


def test_header_and_one_row_per_registration():
    registrations = [
        make_registration(0, "rsvp_yes"),
        make_registration(1, "rsvp_maybe"),
        make_registration(2, "presale_request"),
        make_registration(3, "waitlist", waitlist_position=1),
    ]

    content = build_csv(registrations)
    lines = content.split("\n")

    assert lines[0] == '"Name","Email","Phone","Type","Notes","Registered At"'
    assert lines[-1] == ""
    assert len(lines[:-1]) == len(registrations) + 1
    assert lines[1] == '"Guest 0","guest0@example.com","","RSVP Yes","","2026-10-01T18:00:00"'
    assert [row.split('","')[3] for row in lines[1:-1]] == ["RSVP Yes", "RSVP Maybe", "Presale Request", "Waitlist"]


def test_every_field_is_quoted():
    content = build_csv([make_registration(0, phone="555-0100", notes="front row")])
    for line in content.strip().split("\n"):
        fields = line.split('","')
        assert line.startswith('"') and line.endswith('"')
        assert len(fields) == len(CSV_HEADER)


def test_round_trip_recovers_awkward_values():
    awkward = make_registration(
        0,
        name='Dana "DJ" O\'Neil, Jr.',
        notes='Bringing 2 friends, "maybe 3"',
        phone="+1 (555) 010-0000",
    )
    plain = make_registration(1, email=None, notes=None)

    rows = list(csv.reader(io.StringIO(build_csv([awkward, plain]))))

    assert rows[0] == CSV_HEADER
    assert rows[1] == [
        'Dana "DJ" O\'Neil, Jr.',
        "guest0@example.com",
        "+1 (555) 010-0000",
        "RSVP Yes",
        'Bringing 2 friends, "maybe 3"',
        "2026-10-01T18:00:00",
    ]
    assert rows[2][1] == ""
    assert rows[2][4] == ""


def test_embedded_quotes_are_doubled():
    content = build_csv([make_registration(0, notes='say "hi"')])
    assert '"say ""hi"""' in content


def test_empty_export_is_just_the_header():
    assert build_csv([]) == '"Name","Email","Phone","Type","Notes","Registered At"\n'


def test_export_filename_uses_event_title():
    assert export_filename("Rooftop Sessions") == "Rooftop Sessions-registrations.csv"
