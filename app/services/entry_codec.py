import json
from typing import Any, Sequence

from pydantic import ValidationError

from app.schemas.holidays import HolidayEntryList


class InvalidEntriesError(ValueError):
    pass


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON and cannot be exported back out.
    raise ValueError(f"Unsupported JSON constant {token}")


def encode_entries(entries: Sequence[dict[str, Any]], indent: int | None = None) -> str:
    if indent is None:
        # Same shape as JSON.stringify(entries): no whitespace.
        return json.dumps(list(entries), ensure_ascii=False, separators=(",", ":"))
    return json.dumps(list(entries), ensure_ascii=False, indent=indent)


def decode_entries(text: str) -> list[dict[str, Any]]:
    """Parse a JSON array of holiday entries.

    The decoded objects are returned as-is (extra keys included) once the
    whole array has been checked for the four string fields.
    """
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise InvalidEntriesError(f"Not valid JSON: {exc}") from exc

    try:
        HolidayEntryList.validate_python(payload)
    except ValidationError as exc:
        raise InvalidEntriesError(
            f"Expected a list of holiday entries ({exc.error_count()} problems)."
        ) from exc
    return payload
