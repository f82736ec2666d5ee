"""Optional MLflow tracing for interview analyses.

``trace()`` wraps the analysis entrypoints in spans and ``setup()`` turns on
``mlflow.gemini.autolog()`` so each ``generate_content`` call becomes a child
span. Without ``mlflow-tracing`` installed, or with tracing disabled in
:class:`~interview_insight_mcp.config.ServerConfig`, everything here is a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

try:
    import mlflow
    import mlflow.gemini

    _HAS_MLFLOW = True
except ImportError:
    _HAS_MLFLOW = False


def is_enabled() -> bool:
    """Return True when mlflow-tracing is installed and tracing is configured."""
    if not _HAS_MLFLOW:
        return False
    from .config import get_config

    return get_config().tracing_enabled


def trace(
    func: Callable | None = None,
    *,
    name: str | None = None,
    span_type: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable:
    """Identity decorator unless tracing is enabled, then ``mlflow.trace``."""
    if not is_enabled():
        return func if func is not None else (lambda f: f)
    return mlflow.trace(func, name=name, span_type=span_type, attributes=attributes)


def annotate_span(**attributes: Any) -> None:
    """Attach per-interview attributes (file ID, model, media route, status) to the active span.

    No-op when tracing is off or no span is active. Attribute errors are
    logged at debug level and never interrupt an analysis.
    """
    try:
        if not is_enabled():
            return
        span = mlflow.get_current_active_span()
        if span is not None:
            span.set_attributes({f"interview.{k}": v for k, v in attributes.items()})
    except Exception:
        logger.debug("Could not annotate trace span", exc_info=True)


def setup() -> None:
    """Point MLflow at the configured tracking server and enable Gemini autolog.

    Failures are logged; tracing never blocks startup.
    """
    if not is_enabled():
        return

    from .config import get_config

    cfg = get_config()
    try:
        mlflow.set_tracking_uri(cfg.mlflow_tracking_uri)
        mlflow.set_experiment(cfg.mlflow_experiment_name)
        mlflow.gemini.autolog()
        logger.info(
            "MLflow tracing enabled (uri=%s, experiment=%s)",
            cfg.mlflow_tracking_uri,
            cfg.mlflow_experiment_name,
        )
    except Exception:
        logger.warning("MLflow tracing setup failed, continuing without tracing", exc_info=True)


def shutdown() -> None:
    """Flush pending async traces."""
    if not is_enabled():
        return
    try:
        mlflow.flush_trace_async_logging()
    except Exception:
        logger.warning("MLflow trace flush failed", exc_info=True)
