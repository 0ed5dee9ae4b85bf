"""Session state and the screen transitions allowed on it"""

from dataclasses import dataclass, field
from enum import Enum

from bank_portal.domain.exceptions import InvalidTransitionError
from bank_portal.domain.models import AccountSnapshot


class Screen(str, Enum):
    LOGGED_OUT = "logged_out"
    DASHBOARD = "dashboard"
    PAYMENT = "payment"


@dataclass
class FormInputs:
    """Values last entered in the login and payment forms"""

    account_number: str = ""
    recipient_id: str = ""
    amount: str = ""

    def clear_payment(self) -> None:
        self.recipient_id = ""
        self.amount = ""

    def clear(self) -> None:
        self.account_number = ""
        self.clear_payment()


@dataclass
class Session:
    """
    State of one running client.

    Invariant: `account` is set exactly when the screen is DASHBOARD or PAYMENT.
    Only the transition methods below change `screen` and `account`.
    """

    screen: Screen = Screen.LOGGED_OUT
    account: AccountSnapshot | None = None
    status_message: str | None = None
    busy: bool = False
    form: FormInputs = field(default_factory=FormInputs)

    @property
    def logged_in(self) -> bool:
        return self.account is not None

    def _require(self, *screens: Screen) -> None:
        if self.screen not in screens:
            allowed = ", ".join(s.value for s in screens)
            raise InvalidTransitionError(
                f"Cannot leave {self.screen.value} here (allowed from: {allowed})"
            )

    def begin(self) -> None:
        """Mark an operation as in flight and clear the previous outcome"""
        self.busy = True
        self.status_message = None

    def finish(self, message: str | None = None) -> None:
        self.busy = False
        self.status_message = message

    def enter_dashboard(self, account: AccountSnapshot) -> None:
        """LoggedOut -> Dashboard after a successful login"""
        self._require(Screen.LOGGED_OUT)
        self.account = account
        self.screen = Screen.DASHBOARD

    def show_payment(self) -> None:
        self._require(Screen.DASHBOARD)
        self.screen = Screen.PAYMENT

    def show_dashboard(self) -> None:
        self._require(Screen.PAYMENT)
        self.screen = Screen.DASHBOARD

    def replace_account(self, account: AccountSnapshot) -> None:
        """Swap in a refreshed snapshot without changing screen"""
        self._require(Screen.DASHBOARD, Screen.PAYMENT)
        self.account = account

    def reset(self) -> None:
        """Any screen -> LoggedOut, discarding identity, inputs and message"""
        self.screen = Screen.LOGGED_OUT
        self.account = None
        self.status_message = None
        self.form.clear()
