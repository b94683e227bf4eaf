"""potkit.core -- the Pot type and the pieces around it.

Module Map (recommended reading order)
--------------------------------------
**Type System & Errors (start here)**
  pot               Pot[T] and its six variants
  errors            Structured error hierarchy with categories
  result            Ok / Err, the target of Pot.to_try()
  either            Left / Right, the targets of to_left() / to_right()
  partial           PartialFunction for collect / recover_with
  timestamps        Monotonic millisecond clock

**Collaborator Helpers**
  lifecycle         Load events + pure apply_event() reducer

**Cross-Cutting Concerns**
  logging           Structured logging (structlog)
  settings          PotSettings (pydantic-settings)

Tags:
    potkit, pot, remote-data, loading-state

Doc-Types:
    package-overview, module-index
"""

from potkit.core.either import Either, Left, Right
from potkit.core.errors import (
    EmptyValueError,
    ErrorCategory,
    LoadTimeoutError,
    NetworkError,
    PotError,
    RateLimitError,
    RetriesExhaustedError,
    SourceError,
    TransientError,
    categorize_error,
    get_retry_after,
    is_retryable,
)
from potkit.core.lifecycle import (
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    LoadEvent,
    RetryRequested,
    apply_event,
    should_refetch,
)
from potkit.core.partial import PartialFunction
from potkit.core.pot import (
    Empty,
    Failed,
    FailedStale,
    Pending,
    PendingStale,
    Pot,
    PotState,
    Ready,
    from_optional,
    from_result,
    try_pot,
)
from potkit.core.result import Err, Ok, Result, try_result

__all__ = [
    # Pot
    "Pot",
    "PotState",
    "Empty",
    "Ready",
    "Pending",
    "PendingStale",
    "Failed",
    "FailedStale",
    "from_optional",
    "from_result",
    "try_pot",
    # Errors
    "ErrorCategory",
    "PotError",
    "EmptyValueError",
    "RetriesExhaustedError",
    "TransientError",
    "NetworkError",
    "LoadTimeoutError",
    "RateLimitError",
    "SourceError",
    "is_retryable",
    "get_retry_after",
    "categorize_error",
    # Result / Either / PartialFunction
    "Result",
    "Ok",
    "Err",
    "try_result",
    "Either",
    "Left",
    "Right",
    "PartialFunction",
    # Lifecycle
    "LoadEvent",
    "FetchStarted",
    "FetchSucceeded",
    "FetchFailed",
    "RetryRequested",
    "apply_event",
    "should_refetch",
]
