"""
Errors raised by the ladder engine.

State machine rejections are NOT exceptions - they come back as failed
ActionResults. Exceptions here are for broken preconditions and for
corrupted ladder data.
"""


class LadderError(Exception):
    """Base class for ladder engine errors."""


class LadderPreconditionError(LadderError, ValueError):
    """Raised when a caller passes arguments the engine cannot work with."""


class LadderInvariantError(LadderError, AssertionError):
    """
    Raised when a ladder graph violates its structural invariants.

    Generated graphs never do this; seeing one means the graph was built
    by hand or the generator is broken.
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Ladder invariant violated with {len(errors)} error(s): " + "; ".join(errors)
        )
