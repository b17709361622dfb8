"""
Deferred boolean outcomes handed back to gate callers.
"""

import asyncio
from typing import Callable, Tuple


Resolver = Callable[[bool], None]


def create_deferred() -> Tuple["asyncio.Future[bool]", Resolver]:
    """Create a future on the running loop together with its resolver.

    The resolver settles the future with the given outcome. A future the
    caller has already cancelled is left alone; settling a future twice
    raises ``asyncio.InvalidStateError``.
    """
    loop = asyncio.get_running_loop()
    future: "asyncio.Future[bool]" = loop.create_future()

    def resolve(value: bool) -> None:
        if future.cancelled():
            return
        future.set_result(value)

    return future, resolve
