"""
staffing_engines.tracer -- STAFFING_ENGINE_TRACE for engine entry points.

Responsibility:
    ``@traced_engine`` wraps an engine call and logs one record naming the
    engine, its version, a fingerprint of the chosen inputs and how long the
    call took. Two calls with the same fingerprint saw the same inputs, so a
    figure shown on the contract form can be tied back to what produced it.

Architecture position:
    Engines -- support for the pure calculation layer. Emits a log record
    and nothing else.

Invariants enforced:
    - Fingerprints are deterministic: records are rendered field by field,
      mappings with sorted keys, sequences in order, then hashed with
      SHA-256 (first 16 hex chars).
    - Arguments are bound against the wrapped signature, so passing a
      parameter by position or by keyword gives the same fingerprint.
    - Inputs and results pass through untouched.
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import logging
import time
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

_logger = logging.getLogger("staffing_kernel.engines.tracer")

FINGERPRINT_LENGTH = 16


def _canonicalize(value: Any) -> str:
    """Stable text form of ``value`` for hashing."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        body = ",".join(
            f"{f.name}={_canonicalize(getattr(value, f.name))}"
            for f in dataclasses.fields(value)
        )
        return f"{type(value).__name__}({body})"
    if isinstance(value, Mapping):
        body = ",".join(
            f"{k}:{_canonicalize(v)}"
            for k, v in sorted(value.items(), key=lambda item: str(item[0]))
        )
        return "{" + body + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """Hash of the named arguments; absent names hash as ``null``."""
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return digest[:FINGERPRINT_LENGTH]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorate an engine entry point with STAFFING_ENGINE_TRACE logging.

    Args:
        engine_name: Engine identifier, e.g. ``"allocation"``.
        engine_version: Version of the engine's rules, e.g. ``"1.0"``.
        fingerprint_fields: Parameter names hashed into
            ``input_fingerprint``.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        def fingerprint(args: tuple, kwargs: dict) -> str | None:
            if not fingerprint_fields:
                return ""
            try:
                bound = signature.bind(*args, **kwargs)
            except TypeError:
                return None
            bound.apply_defaults()
            return compute_input_fingerprint(fingerprint_fields, bound.arguments)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = fingerprint(args, kwargs)
            if fp is None:
                # Bad call: the wrapped function raises its own TypeError.
                return func(*args, **kwargs)

            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            _logger.info(
                "STAFFING_ENGINE_TRACE",
                extra={
                    "trace_type": "STAFFING_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "function": func.__qualname__,
                    "input_fingerprint": fp,
                    "duration_ms": round(elapsed_ms, 2),
                },
            )
            return result

        return wrapper

    return decorator
