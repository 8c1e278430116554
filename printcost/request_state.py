"""
Lifecycle of a one-shot AI request.

idle -> in_flight -> settled_ok | settled_error, and back to in_flight on the
next start. There is no cancel: an in-flight request runs to completion or
failure, and a second start while busy is refused.
"""

import enum
import threading


class RequestState(str, enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SETTLED_OK = "settled_ok"
    SETTLED_ERROR = "settled_error"


class RequestEvent(str, enum.Enum):
    START = "start"
    SUCCEED = "succeed"
    FAIL = "fail"


TRANSITIONS = {
    (RequestState.IDLE, RequestEvent.START): RequestState.IN_FLIGHT,
    (RequestState.SETTLED_OK, RequestEvent.START): RequestState.IN_FLIGHT,
    (RequestState.SETTLED_ERROR, RequestEvent.START): RequestState.IN_FLIGHT,
    (RequestState.IN_FLIGHT, RequestEvent.SUCCEED): RequestState.SETTLED_OK,
    (RequestState.IN_FLIGHT, RequestEvent.FAIL): RequestState.SETTLED_ERROR,
}


class InvalidTransition(RuntimeError):
    def __init__(self, state: RequestState, event: RequestEvent):
        super().__init__(f"Cannot {event.value} a request that is {state.value}")
        self.state = state
        self.event = event


class RequestInProgress(InvalidTransition):
    """A start was attempted while the previous request is still in flight."""


class RequestTracker:
    """Thread-safe state holder for one kind of AI request."""

    def __init__(self, name: str):
        self.name = name
        self._state = RequestState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is RequestState.IN_FLIGHT

    def fire(self, event: RequestEvent) -> RequestState:
        with self._lock:
            key = (self._state, event)
            if key not in TRANSITIONS:
                if event is RequestEvent.START and self.busy:
                    raise RequestInProgress(self._state, event)
                raise InvalidTransition(self._state, event)
            self._state = TRANSITIONS[key]
            return self._state

    def start(self) -> RequestState:
        return self.fire(RequestEvent.START)

    def succeed(self) -> RequestState:
        return self.fire(RequestEvent.SUCCEED)

    def fail(self) -> RequestState:
        return self.fire(RequestEvent.FAIL)
