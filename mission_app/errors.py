# mission_app/errors.py
"""
Errors raised by the managers and caught by the menu loop.

None of these end the session: the menu prints the message and shows
itself again. ``StoreError`` additionally carries the driver failure as
its ``__cause__``.

``ConflictError`` covers requests that collide with existing rows. The
two such cases today, a duplicate user name and a repeated join, are
reported as results (``Registration.created``, ``join() -> False``), so
nothing raises it yet.
"""


class MissionAppError(Exception):
    """Base class for every error the menus know how to report."""


class NotFoundError(MissionAppError):
    pass


class ConflictError(MissionAppError):
    pass


class ForbiddenError(MissionAppError):
    pass


class InvalidInputError(MissionAppError):
    pass


class StoreError(MissionAppError):
    pass
