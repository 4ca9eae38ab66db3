"""Thread-safe lists of callbacks with handles for removal."""

import threading


class EventHandlerHandle:
    """Opaque token identifying one handler registered with an :class:`EventHandlerList`."""

    __slots__ = ()

    def __repr__(self):
        return f"<EventHandlerHandle at {id(self):#x}>"


class EventHandlerList:
    """Ordered collection of callbacks that are invoked together."""

    def __init__(self):
        self._callbacks = {}
        self._lock = threading.Lock()

    def add(self, callback):
        """Register ``callback`` and return a handle that can later remove it."""
        handle = EventHandlerHandle()
        with self._lock:
            self._callbacks[handle] = callback
        return handle

    def remove(self, handle):
        """Unregister the handler identified by ``handle``.

        Raises :class:`ValueError` if the handle is not registered here.
        """
        with self._lock:
            try:
                del self._callbacks[handle]
            except KeyError:
                raise ValueError("handler is not registered in this list") from None

    def invoke(self, *args, **kwargs):
        """Call every registered handler, in registration order, with the given arguments."""
        with self._lock:
            callbacks = list(self._callbacks.values())
        for callback in callbacks:
            callback(*args, **kwargs)

    def __len__(self):
        with self._lock:
            return len(self._callbacks)