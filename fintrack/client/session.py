"""Client-side session state machine."""

import logging
from collections.abc import Callable
from enum import Enum

from fintrack.client.api import ApiError, OnboardingAPI
from fintrack.client.storage import CredentialStore, MemoryCredentialStore, StoredCredentials

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Where the client stands with respect to authentication."""

    ANONYMOUS = "anonymous"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"


class SessionController:
    """Holds the token and cached user, and gates the protected view.

    A stored token is not trusted on its own: entering the protected view
    moves through VERIFYING, which asks the server to confirm the token
    before the view is allowed to render.
    """

    def __init__(self, api: OnboardingAPI, store: CredentialStore | None = None):
        self.api = api
        self.store = store or MemoryCredentialStore()
        self.state = SessionState.ANONYMOUS
        self.error: str | None = None
        self.loading = False
        self._listeners: list[Callable[[SessionState], None]] = []

    @property
    def token(self) -> str | None:
        credentials = self.store.load()
        return credentials.token if credentials else None

    @property
    def user(self) -> dict | None:
        credentials = self.store.load()
        return credentials.user if credentials else None

    def subscribe(self, listener: Callable[[SessionState], None]) -> None:
        """Call listener with the new state on every transition."""
        self._listeners.append(listener)

    def _transition(self, state: SessionState) -> None:
        if state == self.state:
            return
        logger.debug(f"Session {self.state.value} -> {state.value}")
        self.state = state
        for listener in self._listeners:
            listener(state)

    def _authenticate(self, call: Callable[[], dict]) -> bool:
        if self.loading:
            return False
        self.error = None
        self.loading = True
        try:
            data = call()
        except ApiError as e:
            self.error = e.message
            return False
        finally:
            self.loading = False
        self.store.save(StoredCredentials(token=data["token"], user=data["user"]))
        self._transition(SessionState.AUTHENTICATED)
        return True

    def register(self, name: str, email: str, password: str) -> bool:
        return self._authenticate(lambda: self.api.register(name, email, password))

    def login(self, email: str, password: str) -> bool:
        return self._authenticate(lambda: self.api.login(email, password))

    def google_login(self, credential: str) -> bool:
        return self._authenticate(lambda: self.api.google_login(credential))

    def logout(self) -> None:
        """Discard credentials. The server keeps no session to end."""
        self.store.clear()
        self._transition(SessionState.ANONYMOUS)

    def enter_protected_view(self) -> bool:
        """Verify stored credentials before the protected view renders.

        Returns False when the caller should redirect to the entry view.
        """
        credentials = self.store.load()
        if credentials is None:
            self._transition(SessionState.ANONYMOUS)
            return False

        self._transition(SessionState.VERIFYING)
        try:
            self.api.verify(credentials.token)
        except ApiError as e:
            logger.info(f"Stored token not confirmed: {e.message}")
            if e.is_auth_failure:
                self.handle_unauthorized()
            else:
                # Unconfirmed is treated as invalid, even for network errors
                self.error = e.message
                self.logout()
            return False

        self._transition(SessionState.AUTHENTICATED)
        return True

    def handle_unauthorized(self) -> None:
        """React to a 401/403 from any protected call: credentials are gone."""
        self.error = "Your session has expired. Please sign in again."
        self.logout()
