from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

try:
    import orjson
except ImportError:  # pragma: nocover
    orjson = None  # type: ignore

try:
    import ujson
except ImportError:  # pragma: nocover
    ujson = None  # type: ignore


class _JsonHandler(ABC):
    @staticmethod
    @abstractmethod
    def dumps(obj: Any) -> str: ...

    @staticmethod
    @abstractmethod
    def loads(json_string: str | bytes | bytearray) -> Any: ...


class BuiltinHandler(_JsonHandler):
    """Uses the json module from the Python standard library.

    Output is compact (no spaces after separators) so query strings built with it match the
    ones echoed back by the search service.
    """

    @staticmethod
    def dumps(obj: Any) -> str:
        return json.dumps(obj, separators=(",", ":"))

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return json.loads(json_string)


class OrjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if orjson is None:  # pragma: no cover
            raise ValueError("orjson must be installed to use the OrjsonHandler")

    @staticmethod
    def dumps(obj: Any) -> str:
        return orjson.dumps(obj).decode("utf-8")

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return orjson.loads(json_string)


class UjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if ujson is None:  # pragma: no cover
            raise ValueError("ujson must be installed to use the UjsonHandler")

    @staticmethod
    def dumps(obj: Any) -> str:
        return ujson.dumps(obj, ensure_ascii=False)

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return ujson.loads(json_string)
