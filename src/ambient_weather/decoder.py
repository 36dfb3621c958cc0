"""Map raw vendor JSON onto :class:`WeatherData` records."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from ambient_weather.exceptions import DecodeError
from ambient_weather.schemas import WeatherData

logger = logging.getLogger(__name__)


class Strictness(StrEnum):
    """How to treat a record with wrongly-typed fields."""

    LENIENT = "lenient"  # drop the bad fields, keep the rest
    STRICT = "strict"  # reject the record


def decode_one(obj: Any, strictness: Strictness = Strictness.LENIENT) -> WeatherData:
    """
    Decode a single reading.

    Args:
        obj: Parsed JSON value, expected to be an object.
        strictness: LENIENT leaves wrongly-typed fields unset and turns a
            non-object into an empty record. STRICT raises instead.

    Raises:
        DecodeError: Under STRICT, when ``obj`` is not an object or any field
            has the wrong type.
    """
    if not isinstance(obj, dict):
        if strictness is Strictness.STRICT:
            raise DecodeError(f"Expected a JSON object, got {type(obj).__name__}")
        return WeatherData()

    try:
        return WeatherData.model_validate(obj)
    except ValidationError as err:
        if strictness is Strictness.STRICT:
            raise DecodeError(f"Malformed weather record: {err}") from err
        rejected = {error["loc"][0] for error in err.errors() if error["loc"]}
        logger.debug("Dropping malformed fields %s", sorted(map(str, rejected)))
        kept = {key: value for key, value in obj.items() if key not in rejected}
        return WeatherData.model_validate(kept)


def decode_many(arr: Any, strictness: Strictness = Strictness.STRICT) -> list[WeatherData]:
    """
    Decode a list of readings, preserving order.

    Raises:
        DecodeError: If ``arr`` is not a list, or under STRICT if any element
            is malformed. The whole batch fails in that case.
    """
    if not isinstance(arr, list):
        raise DecodeError(f"Expected a JSON array, got {type(arr).__name__}")

    records: list[WeatherData] = []
    for i, obj in enumerate(arr):
        try:
            records.append(decode_one(obj, strictness))
        except DecodeError as err:
            raise DecodeError(f"Record {i}: {err}") from err
    return records
