"""Runtime measurement of named, possibly nested tasks."""

import copy
import math
import threading
import time
from dataclasses import dataclass, field

from sensefuse.filter import SlidingWindowFilter

#: Width of one histogram bucket of the "total" task, in milliseconds.
HIST_BUCKET_SIZE = 10

_HIST_BUCKETS = 10
_FIELDS = ("task", "count", "last", "min", "max", "avg", "run_avg")
_U64_MAX = 2**64 - 1
_TOTAL = "total"


def _default_clock():
    """Return a monotonic timestamp in microseconds."""
    return time.perf_counter_ns() // 1000


@dataclass
class EvaluationFormular:
    """Measurement state of one task; times are in microseconds."""

    name: str
    active: bool = False
    accumulate: int = 0
    count: int = 0
    last: int = 0
    sum: int = 0
    min: int = _U64_MAX
    max: int = 0
    filter: SlidingWindowFilter = field(default_factory=lambda: SlidingWindowFilter(100))


class RuntimeEvaluationError(Exception):
    """Raised when start and stop are not called in matching pairs."""

    def __init__(self, message=None):
        super().__init__(
            message
            or "Runtime evaluation exception:\nStart was called for an already started "
            "measurement or stop was called before calling start!"
        )


class RuntimeEvaluator:
    """Measures the runtime of named tasks, excluding the evaluator's own overhead.

    Time is only counted between calls of the evaluator's methods and is added to
    every task that is active at that moment, so tasks may be nested.
    ``clock`` returns the current time in microseconds.
    """

    _instance = None
    _instance_lock = threading.Lock()

    def __init__(self, clock=None):
        self._clock = clock or _default_clock
        self._forms = []
        self._histogram = [0] * _HIST_BUCKETS
        self._start_time = self._clock()

    @classmethod
    def get_instance(cls):
        """Return the shared evaluator, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def _pause(self):
        duration = self._clock() - self._start_time
        for form in self._forms:
            if form.active:
                form.accumulate += duration

    def _resume(self):
        self._start_time = self._clock()

    def _find(self, task_name):
        return next((form for form in self._forms if form.name == task_name), None)

    def clear(self):
        """Forget all tasks."""
        self._forms.clear()

    def start(self, task_name):
        """Start measuring ``task_name``.

        Raises :class:`RuntimeEvaluationError` if the task is already being measured.
        """
        self._pause()
        form = self._find(task_name)
        if form is None:
            form = EvaluationFormular(task_name)
            self._forms.append(form)
        elif form.active:
            raise RuntimeEvaluationError()
        form.active = True
        form.accumulate = 0
        self._resume()

    def stop(self, task_name):
        """Stop measuring ``task_name`` and record the measured time.

        Raises :class:`RuntimeEvaluationError` if the task was not started.
        """
        self._pause()
        form = self._find(task_name)
        if form is None or not form.active:
            raise RuntimeEvaluationError()

        elapsed = form.accumulate
        form.active = False
        form.count += 1
        form.last = elapsed
        form.sum += elapsed
        form.filter.update(float(elapsed))
        if elapsed < form.min:
            form.min = elapsed
        # the first measurement is ignored for the maximum
        if elapsed > form.max and form.count != 1:
            form.max = elapsed

        if task_name == _TOTAL:
            bucket = int(elapsed / 1000.0 / HIST_BUCKET_SIZE)
            self._histogram[min(bucket, _HIST_BUCKETS - 1)] += 1

        self._resume()

    def forms(self):
        """Return copies of the measurement state of all tasks, in creation order."""
        return copy.deepcopy(self._forms)

    def __str__(self):
        """Return a table of all finished measurements in milliseconds."""
        self._pause()

        width = max([len(name) for name in _FIELDS] + [len(f.name) for f in self._forms])
        last = len(_FIELDS) - 1

        parts = ["\n"]
        parts.extend(
            name.rjust(width) + ("\n" if i == last else " | ") for i, name in enumerate(_FIELDS)
        )
        parts.extend("-" * width + ("-\n" if i == last else "-+-") for i in range(len(_FIELDS)))

        for form in self._forms:
            if form.active:
                continue
            avg = form.sum // form.count
            run_avg = int(form.filter.mean)
            values = (form.last, form.min, form.max, avg, run_avg)
            parts.append(form.name.rjust(width) + " | " + str(form.count).rjust(width) + " | ")
            parts.append(" | ".join(str(v // 1000).rjust(width) for v in values) + "\n")

        total = self._find(_TOTAL)
        if total is not None:
            line_length = len(_FIELDS) * (width + 2) + (len(_FIELDS) - 1) - len("10-20: ")
            for i, hits in enumerate(self._histogram):
                label = str(i * HIST_BUCKET_SIZE).rjust(2) + "-"
                if i < _HIST_BUCKETS - 1:
                    label += str((i + 1) * HIST_BUCKET_SIZE).rjust(2)
                else:
                    label += "  "
                bar = math.ceil(hits * line_length / total.count) if total.count else 0
                parts.append(f"{label}: {'=' * bar}\n")

        self._resume()
        return "".join(parts)