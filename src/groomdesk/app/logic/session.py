"""Application state and its lifecycle.

One `AppSession` exists per browser session. It is created at startup,
follows the backend's auth-state-change notifications and is torn down on
sign-out. Views receive it explicitly instead of reading globals.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from loguru import logger

from groomdesk.app.logic.appointments import AppointmentStore
from groomdesk.app.logic.clients import ClientStore
from groomdesk.app.logic.finance import get_start_of_week, shift_week
from groomdesk.app.logic.stock import ProductStore
from groomdesk.app.logic.store import EntityStore
from groomdesk.config.models import AppConfig
from groomdesk.core.auth import AuthService, Credentials
from groomdesk.core.backend import BackendGateway, SchemaStatus
from groomdesk.core.calculator import CalculatorState
from groomdesk.core.domain_models import ViewState


@dataclass
class AppState:
    """Shell-level state: who is signed in, what is shown, is the schema usable."""

    session: Any | None = None
    current_view: ViewState = ViewState.APPOINTMENTS
    schema_status: SchemaStatus | None = None
    started: bool = False
    calculator: CalculatorState = field(default_factory=CalculatorState)
    finance_week: date | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def needs_schema_upgrade(self) -> bool:
        return self.schema_status is not None and not self.schema_status.ok


class AppSession:
    """Owns the backend gateway, auth service, shell state and entity stores."""

    def __init__(self, client: Any, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.gateway = BackendGateway(client)
        self.auth = AuthService(client.auth)
        self.state = AppState()
        self.clients = ClientStore(self.gateway)
        self.products = ProductStore(self.gateway)
        self.appointments = AppointmentStore(self.gateway)
        self._subscription: Any | None = None

    # --- Lifecycle ---

    def start(self) -> None:
        """Restore the persisted session and subscribe to auth changes. Idempotent."""
        if self.state.started:
            return
        self.state.session = self.auth.get_session()
        self._subscription = self.auth.subscribe(self.handle_auth_event)
        self.state.started = True
        logger.info(f"App session started (authenticated={self.state.is_authenticated})")

    def handle_auth_event(self, event: Any, session: Any | None) -> None:
        """Auth-state-change callback: the notified session replaces the current one."""
        logger.debug(f"Auth event {event}")
        had_session = self.state.is_authenticated
        self.state.session = session
        if session is None and had_session:
            self._reset_user_state()
        elif session is not None and not had_session:
            for store in self.stores:
                store.reopen()

    def sign_in(self, credentials: Credentials) -> None:
        session = self.auth.sign_in(credentials)
        # the subscription normally delivers the session already
        if session is not None and self.state.session is None:
            self.handle_auth_event("SIGNED_IN", session)

    def sign_up(self, credentials: Credentials) -> str:
        return self.auth.sign_up(credentials)

    def sign_out(self) -> None:
        """Sign out remotely and tear down all per-user state."""
        self.auth.sign_out()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.state.session = None
        self.state.started = False
        self._reset_user_state()

    def _reset_user_state(self) -> None:
        for store in self.stores:
            store.close()
        self.state.schema_status = None
        self.state.current_view = ViewState.APPOINTMENTS
        self.state.calculator.clear()
        self.state.finance_week = None
        logger.info("Per-user state cleared")

    # --- Schema ---

    def ensure_schema(self) -> SchemaStatus:
        """Run the compatibility probe once per signed-in session."""
        if self.state.schema_status is None:
            probe = self.config.schema_probe
            self.state.schema_status = self.gateway.probe_schema(probe.table, probe.column)
        return self.state.schema_status

    def recheck_schema(self) -> SchemaStatus:
        self.state.schema_status = None
        return self.ensure_schema()

    # --- Navigation ---

    @property
    def stores(self) -> list[EntityStore[Any]]:
        return [self.clients, self.products, self.appointments]

    def store_for(self, view: ViewState) -> EntityStore[Any] | None:
        """Store holding the data shown on a view. Finance reads appointments."""
        return {
            ViewState.APPOINTMENTS: self.appointments,
            ViewState.CLIENTS: self.clients,
            ViewState.STOCK: self.products,
            ViewState.FINANCE: self.appointments,
        }.get(view)

    # --- Finance week ---

    def finance_week_start(self, today: date) -> date:
        """Monday of the week shown on the finance view. Defaults to the current week."""
        if self.state.finance_week is None:
            self.state.finance_week = get_start_of_week(today)
        return self.state.finance_week

    def shift_finance_week(self, weeks: int, today: date) -> date:
        self.state.finance_week = shift_week(self.finance_week_start(today), weeks)
        return self.state.finance_week

    def navigate(self, view: ViewState) -> None:
        """Switch view. Entering a view refetches its data."""
        if view == self.state.current_view:
            return
        logger.debug(f"Navigating {self.state.current_view.value} -> {view.value}")
        self.state.current_view = view
        store = self.store_for(view)
        if store is not None:
            store.invalidate()
