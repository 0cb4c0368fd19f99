"""Student bus registration."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.records import PENDING, Route, Stop
from campus_transit.views.directory import RouteDirectory

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Registration submitted successfully! Your request is pending approval."

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Banner:
    """One-line outcome message shown above a form."""

    kind: str
    text: str


@dataclass(frozen=True)
class RegistrationForm:
    """Transient registration form fields."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    route_id: str = ""
    stop_id: str = ""
    semester: str = ""

    def missing_fields(self) -> list[str]:
        return [f.name for f in fields(self) if not str(getattr(self, f.name)).strip()]


def find_or_create_student(client: BackendClient, form: RegistrationForm) -> str:
    """Return the id of the student with the form's email, creating it if absent."""
    existing = client.select_one("students", columns="id", filters={"email": form.email})
    if existing:
        return str(existing["id"])
    created = client.insert(
        "students",
        {
            "email": form.email,
            "full_name": form.full_name,
            "phone": form.phone,
            "address": form.address,
        },
    )
    logger.info("Created student %s for %s", created.get("id"), form.email)
    return str(created["id"])


def submit_registration(client: BackendClient, form: RegistrationForm) -> str:
    """Create a pending registration for the form; returns the registration id.

    The student lookup/insert and the registration insert are two separate
    calls, so a failure between them leaves a student with no registration.
    """
    student_id = find_or_create_student(client, form)
    registration = client.insert(
        "student_registrations",
        {
            "student_id": student_id,
            "route_id": form.route_id,
            "stop_id": form.stop_id,
            "semester": form.semester,
            "status": PENDING,
        },
    )
    return str(registration.get("id", ""))


class RegistrationSubmitter:
    """Registration screen state: form fields, route/stop choices, banner."""

    def __init__(
        self, client: BackendClient, directory: RouteDirectory, default_semester: str
    ) -> None:
        self._client = client
        self._directory = directory
        self._default_semester = default_semester
        self.form = RegistrationForm(semester=default_semester)
        self.routes: list[Route] = []
        self.stops: list[Stop] = []
        self.banner: Banner | None = None

    def mount(self) -> None:
        self.routes = self._directory.active_routes()

    def unmount(self) -> None:
        pass

    def select_route(self, form: RegistrationForm) -> None:
        """Keep the typed fields and load stops for the chosen route."""
        if form.route_id != self.form.route_id:
            form = replace(form, stop_id="")
        self.form = form
        self.stops = self._directory.stops_for(form.route_id) if form.route_id else []

    def submit(self, form: RegistrationForm) -> Banner:
        self.form = form
        missing = form.missing_fields()
        if missing:
            self.banner = Banner(ERROR, f"Missing required fields: {', '.join(missing)}")
            return self.banner

        try:
            registration_id = submit_registration(self._client, form)
        except BackendClientError as exc:
            logger.warning("Registration for %s failed: %s", form.email, exc)
            self.banner = Banner(ERROR, str(exc) or "Registration failed. Please try again.")
            return self.banner

        logger.info("Registration %s submitted for %s", registration_id, form.email)
        self.banner = Banner(SUCCESS, SUCCESS_MESSAGE)
        self.form = RegistrationForm(semester=self._default_semester)
        self.stops = []
        return self.banner

    def take_banner(self) -> Banner | None:
        """Return the pending banner once; later renders show none."""
        banner, self.banner = self.banner, None
        return banner


__all__ = [
    "Banner",
    "RegistrationForm",
    "RegistrationSubmitter",
    "SUCCESS",
    "ERROR",
    "SUCCESS_MESSAGE",
    "find_or_create_student",
    "submit_registration",
]
