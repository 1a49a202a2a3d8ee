"""Operation id context variable for logging"""

import contextvars
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

# Create a context variable to store the operation_id
operation_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation_id", default=None
)


@contextmanager
def operation_scope(operation_id: str | None = None) -> Iterator[str]:
    """
    Bind an operation id to every log emitted inside the block.

    Nested scopes keep the outer id so a whole borrowing request is
    traceable as one unit.

    Args:
        operation_id: Explicit id to use (a UUID4 is generated otherwise)

    Yields:
        The active operation id
    """
    current = operation_id_context.get()
    if current is not None and operation_id is None:
        yield current
        return

    token = operation_id_context.set(operation_id or str(uuid.uuid4()))
    try:
        yield operation_id_context.get()
    finally:
        operation_id_context.reset(token)
