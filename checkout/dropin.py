"""
Drop-in Collaborator Interfaces

The payment-method-collection UI, its app-switch handling and tokenization
live inside the third-party drop-in SDK. This module only describes the
surface the coordinator talks to, so any SDK binding (or a fake in tests)
can be plugged in.
"""

from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from checkout.models import DropInRequest


class DropInResult(BaseModel):
    """What the drop-in reports once the buyer is done."""

    nonce: str | None = None
    is_cancelled: bool = False

    model_config = ConfigDict(frozen=True)


class DropInController(Protocol):
    def dismiss(self) -> None: ...


DropInHandler = Callable[
    [DropInController, DropInResult | None, BaseException | None], None
]


class DropInProvider(Protocol):
    def set_return_url_scheme(self, scheme: str) -> None: ...

    def create_controller(
        self,
        authorization: str,
        request: DropInRequest,
        handler: DropInHandler,
    ) -> DropInController: ...


class HostSurface(Protocol):
    """The host screen the drop-in is presented on."""

    def present(self, controller: DropInController) -> None: ...


class AppSwitch(Protocol):
    def handle_open_url(self, url: str) -> bool: ...
