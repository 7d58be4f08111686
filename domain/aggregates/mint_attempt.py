from datetime import UTC, datetime
from uuid import UUID, uuid4

from domain.exceptions import InvalidStateTransitionError
from domain.value_objects.mint_state import MintMode, MintState

_TRANSITIONS: dict[MintState, frozenset[MintState]] = {
    MintState.VALIDATING: frozenset({MintState.UPLOADING_ARTIFACT}),
    MintState.UPLOADING_ARTIFACT: frozenset({MintState.UPLOADING_METADATA}),
    MintState.UPLOADING_METADATA: frozenset(
        {MintState.SUBMITTING, MintState.AWAITING_EXTERNAL_SIGNATURE},
    ),
    MintState.SUBMITTING: frozenset({MintState.CONFIRMING}),
    MintState.CONFIRMING: frozenset({MintState.COMPLETED}),
}

TERMINAL_STATES = frozenset(
    {MintState.COMPLETED, MintState.FAILED, MintState.AWAITING_EXTERNAL_SIGNATURE},
)


class MintAttempt:
    """State of one invocation of the mint pipeline.

    Not persisted and never shared between invocations; it only guards the
    ordering of steps and records which states were visited.
    """

    def __init__(self, mode: MintMode, attempt_id: UUID | None = None) -> None:
        self.attempt_id = attempt_id or uuid4()
        self.mode = mode
        self.state = MintState.VALIDATING
        self.history: list[MintState] = [MintState.VALIDATING]
        self.failure_reason: str | None = None
        self.started_at = datetime.now(tz=UTC)
        self.finished_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, next_state: MintState) -> None:
        if next_state == MintState.FAILED:
            msg = "Use fail() to move an attempt to FAILED"
            raise InvalidStateTransitionError(msg)

        allowed = _TRANSITIONS.get(self.state, frozenset())
        if next_state not in allowed:
            msg = f"Cannot move mint attempt from {self.state.value} to {next_state.value}"
            raise InvalidStateTransitionError(msg)

        if next_state == MintState.SUBMITTING and self.mode != MintMode.SERVER_CUSTODIED:
            msg = "Only server-custodied attempts submit transactions"
            raise InvalidStateTransitionError(msg)
        if (
            next_state == MintState.AWAITING_EXTERNAL_SIGNATURE
            and self.mode != MintMode.CLIENT_SIGNED
        ):
            msg = "Only client-signed attempts wait for an external signature"
            raise InvalidStateTransitionError(msg)

        self._enter(next_state)

    def fail(self, reason: str) -> None:
        if self.is_terminal:
            msg = f"Cannot fail a mint attempt already in {self.state.value}"
            raise InvalidStateTransitionError(msg)
        self.failure_reason = reason
        self._enter(MintState.FAILED)

    def _enter(self, state: MintState) -> None:
        self.state = state
        self.history.append(state)
        if self.is_terminal:
            self.finished_at = datetime.now(tz=UTC)
