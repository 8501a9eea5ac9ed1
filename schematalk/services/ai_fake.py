"""
schematalk/services/ai_fake.py
Fake structured-output call shaped like generate_object(schema=..., prompt=...)

run() produces the raw value; the schema validates it before it is returned.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass
class GenerateObjectResult(Generic[T]):
    object: T


async def generate_object(
    schema: Type[T],
    run: Callable[..., Any],
    prompt: Optional[str] = None,
) -> GenerateObjectResult[T]:
    """
    Args:
        schema: pydantic model the output must satisfy
        run: called with (schema=..., prompt=...); may be sync or async

    Raises:
        ValueError: schema or run missing
        pydantic.ValidationError: raw output does not match the schema
    """
    if schema is None or not callable(run):
        raise ValueError("ai-fake: schema and run() are required.")

    logger.debug(f"[ai_fake] generate_object schema={schema.__name__} prompt={prompt!r}")
    raw = run(schema=schema, prompt=prompt)
    if inspect.isawaitable(raw):
        raw = await raw
    return GenerateObjectResult(object=schema.model_validate(raw))
