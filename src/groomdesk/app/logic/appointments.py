"""Logic layer for appointments."""

from datetime import datetime

from groomdesk.app.logic.store import EntityStore
from groomdesk.core.domain_models import Appointment, AppointmentDraft, Client, Table


class AppointmentStore(EntityStore[Appointment]):
    table = Table.APPOINTMENTS.value
    model = Appointment
    order_by = "date"

    def sort_key(self, item: Appointment) -> datetime:
        return item.date

    def add(self, draft: AppointmentDraft) -> Appointment:
        return self.create(draft)

    def toggle_paid(self, appointment_id: str) -> bool | None:
        """Flip the paid flag.

        Returns:
            The local paid flag after the call, or None if the appointment is unknown
        """
        appointment = self.get(appointment_id)
        if appointment is None:
            return None
        self._update(appointment_id, {"is_paid": not appointment.is_paid})
        current = self.get(appointment_id)
        return current.is_paid if current else None


def draft_from_client(client: Client | None, **fields: object) -> AppointmentDraft:
    """Build an appointment draft, prefilling names from a registered client.

    Names typed on the form win over the client's names. The names are copied,
    not linked: later changes to the client do not touch the appointment.
    """
    values = dict(fields)
    if client is not None:
        values["client_id"] = client.id
        values["client_name"] = values.get("client_name") or client.name
        values["pet_name"] = values.get("pet_name") or client.pet_name or ""
    return AppointmentDraft.model_validate(values)
