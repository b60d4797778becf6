"""Return codes shared by every response model."""

from __future__ import annotations

from enum import Enum


class ReturnCode(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
