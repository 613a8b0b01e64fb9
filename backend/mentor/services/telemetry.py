import time
import json
import logging
import asyncio
import os
from typing import Optional
from functools import wraps

logger = logging.getLogger("mentor.telemetry")


def emit_event(event: str, *, route: str, version: str, student_id: Optional[str] = None,
               question_id: Optional[str] = None, topic: Optional[str] = None,
               error_class: Optional[str] = None, error_type: Optional[str] = None,
               latency_ms: Optional[int] = None, ok: Optional[bool] = None):
    payload = {
        "event": event,
        "route": route,
        "version": version,
        "student_id": student_id,
        "question_id": question_id,
        "topic": topic,
        "error_class": error_class,
        "error_type": error_type,
        "latency_ms": latency_ms,
        "ok": ok,
        "ts": time.time(),
    }
    # single-line JSON so log shippers can parse it
    logger.info("telemetry=%s", json.dumps(payload, separators=(",", ":")))

    # persist to Supabase (best-effort, never block the request)
    if os.getenv("ENABLE_TELEMETRY_DB", "0") != "1":
        return

    try:
        from mentor.core.deps import get_supabase_client
        sb = get_supabase_client()
        row = dict(payload)
        row.pop("ts")
        sb.table("telemetry_events").insert(row).execute()
    except Exception as e:
        logger.error("[telemetry.emit_event] %s", e, exc_info=True)


def instrument(route: str, version: str):
    """Time a handler and emit an api_call event whether it returns or raises."""
    def deco(fn):
        if asyncio.iscoroutinefunction(fn):
            @wraps(fn)
            async def wrapped_async(*args, **kwargs):
                t0 = time.time()
                ok = True
                err = None
                try:
                    return await fn(*args, **kwargs)
                except Exception as e:
                    ok = False
                    err = e.__class__.__name__
                    raise
                finally:
                    dt = int((time.time() - t0) * 1000)
                    emit_event("api_call", route=route, version=version, latency_ms=dt, ok=ok,
                               error_type=err)
            return wrapped_async

        @wraps(fn)
        def wrapped(*args, **kwargs):
            t0 = time.time()
            ok = True
            err = None
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                ok = False
                err = e.__class__.__name__
                raise
            finally:
                dt = int((time.time() - t0) * 1000)
                emit_event("api_call", route=route, version=version, latency_ms=dt, ok=ok,
                           error_type=err)
        return wrapped
    return deco
