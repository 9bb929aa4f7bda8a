"""Document lifecycle state machine and read-only gate."""

from __future__ import annotations

from enum import Enum, auto

from .errors import DocumentStateError, ReadOnlyError


class DocumentState(Enum):
    UNLOADED = auto()
    LOADING = auto()
    OPEN = auto()
    SEALED = auto()
    FAILED = auto()


class DocumentEvent(Enum):
    BEGIN_LOAD = auto()
    LOAD_DONE = auto()
    LOAD_FAILED = auto()
    SEAL = auto()


_TRANSITIONS = {
    DocumentState.UNLOADED: {
        DocumentEvent.BEGIN_LOAD: DocumentState.LOADING,
    },
    DocumentState.LOADING: {
        DocumentEvent.LOAD_DONE: DocumentState.OPEN,
        DocumentEvent.LOAD_FAILED: DocumentState.FAILED,
    },
    DocumentState.OPEN: {
        DocumentEvent.SEAL: DocumentState.SEALED,
    },
    DocumentState.SEALED: {},
    DocumentState.FAILED: {},
}


class DocumentStateMachine:
    """
    Lifecycle of one document.

    A single instance is shared by reference with every section, element and
    collection of its document, so sealing a document affects that document
    only. Nodes built outside a document get their own open machine.
    """

    def __init__(self, state: DocumentState = DocumentState.UNLOADED):
        self.state = state

    @classmethod
    def standalone(cls) -> "DocumentStateMachine":
        return cls(DocumentState.OPEN)

    @property
    def is_loaded(self) -> bool:
        return self.state in (DocumentState.OPEN, DocumentState.SEALED)

    @property
    def is_sealed(self) -> bool:
        return self.state is DocumentState.SEALED

    def transition(self, event: DocumentEvent) -> DocumentState:
        next_state = _TRANSITIONS[self.state].get(event)
        if next_state is None:
            raise DocumentStateError(
                f"Invalid document state transition: {self.state.name} --{event.name}-->"
            )
        self.state = next_state
        return self.state

    def ensure_writable(self, what: str) -> None:
        if self.state is not DocumentState.OPEN:
            raise ReadOnlyError(f"The {what} is read only.")
