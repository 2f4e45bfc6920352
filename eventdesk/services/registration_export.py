import csv
import io
from typing import Iterable, List

from eventdesk.models.registration import RegistrationType
from eventdesk.schemas.registration import Registration

CSV_HEADER: List[str] = ["Name", "Email", "Phone", "Type", "Notes", "Registered At"]

TYPE_LABELS = {
    RegistrationType.RSVP_YES.value: "RSVP Yes",
    RegistrationType.RSVP_MAYBE.value: "RSVP Maybe",
    RegistrationType.PRESALE_REQUEST.value: "Presale Request",
    RegistrationType.WAITLIST.value: "Waitlist",
}


def type_label(registration_type: str) -> str:
    return TYPE_LABELS.get(registration_type, registration_type)


def export_filename(event_title: str) -> str:
    return f"{event_title}-registrations.csv"


def build_csv(registrations: Iterable[Registration]) -> str:
    """Every field quoted, embedded quotes doubled, one row per registration in the given order."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for registration in registrations:
        writer.writerow([
            registration.name,
            registration.email or "",
            registration.phone or "",
            type_label(registration.registration_type),
            registration.notes or "",
            registration.created_at.isoformat() if registration.created_at else "",
        ])

    return output.getvalue()
