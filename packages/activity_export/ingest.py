"""Load fetched activity and account JSON into validated models.

Accepted shapes, so that a raw API response can be saved and fed back in:

- a plain list of records;
- a connection object ``{"edges": [{"node": {...}}, ...]}``;
- either of the above nested under ``data.activityFeedItems`` (activities)
  or ``data.identity.accounts`` (accounts).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import ActivityLoadError
from .models import AccountRecord, RawActivity

_ACTIVITY_PATHS = (("data", "activityFeedItems"), ("activityFeedItems",))
_ACCOUNT_PATHS = (("data", "identity", "accounts"), ("identity", "accounts"), ("accounts",))


def _dig(payload: Any, path: tuple[str, ...]) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node


def _records(payload: Any, paths: tuple[tuple[str, ...], ...]) -> list[Any]:
    if isinstance(payload, Mapping):
        for path in paths:
            found = _dig(payload, path)
            if found is not None:
                payload = found
                break
    if isinstance(payload, Mapping) and "edges" in payload:
        return [edge.get("node") if isinstance(edge, Mapping) else edge for edge in payload["edges"]]
    if isinstance(payload, list):
        return payload
    raise ActivityLoadError("expected a JSON list of records or an object with 'edges'")


def _read_json(path: str | PathLike[str]) -> Any:
    p = Path(path)
    try:
        with p.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ActivityLoadError(f"file not found: {p}") from e
    except json.JSONDecodeError as e:
        raise ActivityLoadError(f"invalid JSON in {p}: {e}") from e


def _validate[M: BaseModel](model: type[M], records: list[Any], source: str) -> list[M]:
    out: list[M] = []
    for pos, record in enumerate(records):
        try:
            out.append(model.model_validate(record))
        except ValidationError as e:
            raise ActivityLoadError(f"{source}: record {pos} is invalid: {e}") from e
    return out


def parse_activities(payload: Any) -> list[RawActivity]:
    return _validate(RawActivity, _records(payload, _ACTIVITY_PATHS), "activities")


def parse_accounts(payload: Any) -> list[AccountRecord]:
    return _validate(AccountRecord, _records(payload, _ACCOUNT_PATHS), "accounts")


def load_activities(path: str | PathLike[str]) -> list[RawActivity]:
    return parse_activities(_read_json(path))


def load_accounts(path: str | PathLike[str]) -> list[AccountRecord]:
    return parse_accounts(_read_json(path))


__all__ = ["load_accounts", "load_activities", "parse_accounts", "parse_activities"]
