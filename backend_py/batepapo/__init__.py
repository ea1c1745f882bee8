"""Backend package for the bate-papo chat room.

This package exposes the ASGI application via ``batepapo.main.app``.
Participants join by name, keep their session alive with heartbeats
and exchange public and private messages; a background sweeper drops
participants whose heartbeat has gone stale and announces their
departure in the room.
"""

from __future__ import annotations
