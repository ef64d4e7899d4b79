# SPDX-License-Identifier: Apache-2.0
"""Shared helpers: logging setup, input handling and serialization."""

from .io_utils import open_input, read_json
from .log_config import configure_logging_from_env
from .serialize import to_list, to_obj

__all__ = [
    "configure_logging_from_env",
    "open_input",
    "read_json",
    "to_list",
    "to_obj",
]
