"""Expose API routers for FastAPI.

This package contains the participant and message endpoints of the
chat room. Each module defines a ``router`` object which is registered
in ``batepapo.main``.
"""

from . import participants  # noqa: F401
from . import messages  # noqa: F401
