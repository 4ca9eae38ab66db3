"""Moving average over a sliding window."""

from collections import deque


class SlidingWindowFilter:
    """Running mean over the last ``window_size`` values.

    Values only need to support ``+``, ``-`` and division by a float.
    """

    def __init__(self, window_size, zero=0.0):
        self._window_size = float(window_size)
        self._buffer = deque()
        self._mean = zero

    def update(self, new_value):
        """Add a measurement.

        Returns the measurement itself while the window is filling, and the
        updated mean afterwards. Windows smaller than two pass values through.
        """
        if self._window_size < 2:
            return new_value

        self._buffer.append(new_value)

        if len(self._buffer) <= self._window_size:
            self._mean = self._mean + new_value / self._window_size
            return new_value

        self._mean = self._mean + (self._buffer[-1] - self._buffer[0]) / self._window_size
        self._buffer.popleft()
        return self._mean

    @property
    def buffer(self):
        """The values currently in the window, oldest first."""
        return tuple(self._buffer)

    @property
    def mean(self):
        """The current mean."""
        return self._mean