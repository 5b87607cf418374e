from __future__ import annotations

from typing import Any, TypeAlias

Filter: TypeAlias = list[str | list[str]]
JsonDict: TypeAlias = dict[str, Any]
