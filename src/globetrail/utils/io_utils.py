# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator


@contextmanager
def open_input(path_or_dash: str | Path) -> Iterator[BinaryIO]:
    """Yield a readable binary file-like for path or '-' (stdin) without closing stdin."""
    if str(path_or_dash) == "-":
        yield sys.stdin.buffer
    else:
        with Path(path_or_dash).open("rb") as f:
            yield f


def read_json(path_or_dash: str | Path) -> Any:
    """Decode the JSON document at ``path_or_dash`` ('-' reads stdin)."""
    with open_input(path_or_dash) as f:
        return json.loads(f.read().decode("utf-8"))
