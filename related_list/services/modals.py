"""Independent modal lifecycles: Closed -> Open -> Submitting -> Closed | Open."""

from __future__ import annotations

from dataclasses import dataclass

from related_list.schemas.widget import ModalPhase
from related_list.services.errors import InvalidModalTransition


@dataclass(slots=True)
class ModalStateMachine:
    name: str
    phase: ModalPhase = "closed"

    @property
    def is_open(self) -> bool:
        return self.phase != "closed"

    @property
    def is_submitting(self) -> bool:
        return self.phase == "submitting"

    def open(self) -> None:
        if self.phase == "submitting":
            raise InvalidModalTransition(f"{self.name} modal is submitting and cannot be reopened")
        self.phase = "open"

    def submit(self) -> None:
        if self.phase != "open":
            raise InvalidModalTransition(f"{self.name} modal must be open to submit (phase={self.phase})")
        self.phase = "submitting"

    def resolve(self, *, close: bool) -> None:
        """Leave ``submitting``: close on completion, or return to ``open`` for a retry."""

        if self.phase != "submitting":
            raise InvalidModalTransition(f"{self.name} modal is not submitting (phase={self.phase})")
        self.phase = "closed" if close else "open"

    def close(self) -> None:
        self.phase = "closed"
