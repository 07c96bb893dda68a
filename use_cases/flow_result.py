"""Result contract returned by every screen controller."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

FlowStatus = Literal["PROCEED", "RETRY", "REDIRECT"]

ENTRY_SCREEN = "welcome"
AUTH_REQUIRED_MESSAGE = "Authentication required. Please login again."


@dataclass(frozen=True)
class FlowResult:
    """Decision for the presentation layer: advance, stay and show `message`, or go back to entry."""

    status: FlowStatus
    message: str = ""
    next_screen: Optional[str] = None
    data: Any = None


def proceed(next_screen: str, message: str = "", data: Any = None) -> FlowResult:
    return FlowResult(status="PROCEED", message=message, next_screen=next_screen, data=data)


def retry(message: str, data: Any = None) -> FlowResult:
    return FlowResult(status="RETRY", message=message, data=data)


def redirect_to_entry(message: str = AUTH_REQUIRED_MESSAGE) -> FlowResult:
    return FlowResult(status="REDIRECT", message=message, next_screen=ENTRY_SCREEN)
