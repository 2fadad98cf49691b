import enum
from dataclasses import dataclass
from typing import Protocol, Sequence


class DispatchStatus(enum.Enum):
    SENT = "sent"
    AUTHENTICATION_FAILURE = "authentication_failure"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class DispatchResult:
    status: DispatchStatus
    cause: str = ""

    @property
    def ok(self) -> bool:
        return self.status is DispatchStatus.SENT

    @classmethod
    def sent(cls) -> "DispatchResult":
        return cls(DispatchStatus.SENT)

    @classmethod
    def authentication_failure(cls, cause: str) -> "DispatchResult":
        return cls(DispatchStatus.AUTHENTICATION_FAILURE, cause)

    @classmethod
    def transport_failure(cls, cause: str) -> "DispatchResult":
        return cls(DispatchStatus.TRANSPORT_FAILURE, cause)


class MessagingTransport(Protocol):
    def send(self, sender: str, text: str, recipients: Sequence[int]) -> DispatchResult:
        ...
