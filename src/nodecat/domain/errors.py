from __future__ import annotations

"""
Error Domain Models.

Defines the error types surfaced by the concatenation engine: the
AggregateError container used when more than one failure occurs during
a single invocation, and the ContractViolationError raised for malformed
arguments. Also provides the collapse rule that turns the accumulated
failures of an invocation into its final result.
"""

from collections.abc import Sequence
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union, overload

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

DEFAULT_AGGREGATE_MESSAGE = "Multiple errors occurred"
CIRCULAR_MARKER = "[Circular AggregateError]"
INDENT = " " * 4


# -----------------------------------------------------------------------------
# ERROR TYPES
# -----------------------------------------------------------------------------

class ContractViolationError(TypeError):
    """
    Raised when an argument handed to the engine has the wrong shape.

    Attributes:
        parameter: Name of the offending parameter (e.g. 'names').
    """

    def __init__(self, parameter: str, message: str) -> None:
        super().__init__(message)
        self.parameter = parameter


class AggregateError(Exception, Sequence):
    """
    An error made of other errors.

    Behaves as an ordered, indexable collection of its members while still
    being an Exception, so it can travel through any channel that expects a
    single error. Unlike a plain sequence it is always truthy, so
    ``if err:`` keeps working for callers that receive it.
    """

    def __init__(
            self,
            message: Optional[str] = None,
            errors: Optional[Iterable[BaseException]] = None,
    ) -> None:
        self.message = DEFAULT_AGGREGATE_MESSAGE if message is None else str(message)
        super().__init__(self.message)
        self._errors: List[BaseException] = list(errors or [])

    # --- Collection protocol ---

    def append(self, error: BaseException) -> None:
        """Add an error to the end of the collection."""
        self._errors.append(error)

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        return tuple(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    @overload
    def __getitem__(self, index: int) -> BaseException: ...

    @overload
    def __getitem__(self, index: slice) -> List[BaseException]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[BaseException, List[BaseException]]:
        return self._errors[index]

    def __iter__(self) -> Iterator[BaseException]:
        return iter(list(self._errors))

    def __bool__(self) -> bool:
        return True

    # --- Rendering ---

    def render(self, depth: int = 0) -> str:
        """
        Build the multi-line description of this error and its members.

        Args:
            depth: Nesting level; each level adds four spaces of indentation.

        Returns:
            str: Header line followed by one indented block per member.
        """
        return "\n".join(self._render_lines(depth, frozenset()))

    def _render_lines(self, depth: int, ancestors: FrozenSet[int]) -> List[str]:
        seen = ancestors | {id(self)}
        pad = INDENT * depth
        child_pad = INDENT * (depth + 1)

        lines = [f"{pad}{type(self).__name__} of:"]
        for err in self._errors:
            if id(err) in seen:
                lines.append(f"{child_pad}{CIRCULAR_MARKER}")
            elif isinstance(err, AggregateError):
                lines.extend(err._render_lines(depth + 1, seen))
            else:
                for text in describe_error(err).split("\n"):
                    lines.append(f"{child_pad}{text}")
        return lines

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, errors={len(self._errors)})"


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def error_message(err: BaseException) -> str:
    """Return the human-readable message of an error, never empty."""
    text = str(err)
    return text if text else type(err).__name__


def describe_error(err: BaseException) -> str:
    """Render a single error as '<ClassName>: <message>'."""
    if isinstance(err, AggregateError):
        return err.render()
    text = str(err)
    return f"{type(err).__name__}: {text}" if text else type(err).__name__


def combine_errors(errors: Sequence[BaseException]) -> Optional[BaseException]:
    """
    Collapse the failures of one invocation into its final result.

    Args:
        errors: Failures in the order they occurred.

    Returns:
        Optional[BaseException]: None when empty, the error itself when there
        is exactly one, otherwise an AggregateError holding all of them.
    """
    if not errors:
        return None
    if len(errors) == 1:
        return errors[0]
    return AggregateError(errors=errors)
