from __future__ import annotations

from flask import Blueprint

bp = Blueprint("keeper", __name__)

# Handlers register themselves on the blueprint at import time.
from . import api  # noqa: E402,F401

__all__ = ["bp"]
