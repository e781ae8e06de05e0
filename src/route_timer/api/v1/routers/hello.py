from __future__ import annotations

import asyncio
import random

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from route_timer.config import settings

router = APIRouter(tags=["demo"])

_random = random.Random()


def _sample_delay_ms(avg_duration: float, std_dev: float) -> float:
    return max(avg_duration + _random.gauss(0.0, 1.0) * std_dev, 0.0)


@router.get("/hello/{name}", response_class=PlainTextResponse)
async def say_hello(
    name: str,
    avg_duration: float | None = Query(None, alias="avgDuration", ge=0),
    std_dev: float | None = Query(None, alias="stdDev", ge=0),
) -> str:
    """Greet after sleeping a normally distributed number of milliseconds."""
    delay_ms = _sample_delay_ms(
        settings.DEMO_AVG_DURATION_MS if avg_duration is None else avg_duration,
        settings.DEMO_STD_DEV_MS if std_dev is None else std_dev,
    )
    await asyncio.sleep(delay_ms / 1000)
    return f"Hello {name}!"
