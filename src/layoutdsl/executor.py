"""
Executor: apply builder instructions to a real layout job.

This is the one place where expression nodes get values. The job and format
types belong to the caller; the executor only relies on

    job_factory()                -> job
    job.append(text, spacing, f) -> None
    format_value.clone()         -> format value

No type checking is done on the values passed to `append`.
"""

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from .compiler import compile_layout
from .errors import LayoutExecutionError, UnboundNameError
from .expressions import Clone, DefaultConstructor, Expression, Identifier, Literal, Reference
from .model import Append

log = logging.getLogger(__name__)


def _lookup(namespace: Mapping[str, Any], name: str) -> Any:
    try:
        return namespace[name]
    except KeyError:
        raise UnboundNameError(name) from None


def evaluate(
    expr: Expression,
    namespace: Mapping[str, Any],
    format_factory: Optional[Callable[[], Any]] = None,
) -> Any:
    """
    Turn one expression node into a value.

    Raises:
        UnboundNameError: If an identifier is missing from the namespace
        LayoutExecutionError: If a format cannot be cloned or constructed
    """
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, (Identifier, Reference)):
        return _lookup(namespace, expr.name)

    if isinstance(expr, Clone):
        value = _lookup(namespace, expr.target.name)
        clone = getattr(value, "clone", None)
        if not callable(clone):
            raise LayoutExecutionError(
                f"Format '{expr.target.name}' ({type(value).__name__}) has no clone() method"
            )
        return clone()

    if isinstance(expr, DefaultConstructor):
        if format_factory is None:
            raise LayoutExecutionError("A default format is needed but no format_factory was given")
        return format_factory()

    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def execute(
    instructions: Iterable[Append],
    namespace: Mapping[str, Any],
    job_factory: Callable[[], Any],
    format_factory: Optional[Callable[[], Any]] = None,
) -> Any:
    """
    Build a job by replaying instructions in order.

    Every value of an instruction is evaluated before `append` is called,
    so a failing lookup never leaves a half-applied run on the job.

    Args:
        instructions: Append instructions from the emitter
        namespace: Names visible to the layout description
        job_factory: Zero-argument callable returning a fresh job
        format_factory: Zero-argument callable returning a default format

    Returns:
        The job returned by `job_factory`, with one run appended per instruction
    """
    job = job_factory()
    count = 0
    for instr in instructions:
        text = evaluate(instr.text, namespace, format_factory)
        spacing = evaluate(instr.spacing, namespace, format_factory)
        fmt = evaluate(instr.format, namespace, format_factory)
        job.append(text, spacing, fmt)
        count += 1
    log.debug("Appended %d run(s) to %s", count, type(job).__name__)
    return job


def build_layout(
    source: str,
    namespace: Mapping[str, Any],
    job_factory: Callable[[], Any],
    format_factory: Optional[Callable[[], Any]] = None,
) -> Any:
    """Compile `source` and execute it against `namespace` in one call."""
    return execute(compile_layout(source), namespace, job_factory, format_factory)


__all__ = ["build_layout", "evaluate", "execute"]
