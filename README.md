# sensefuse

Building blocks for a lidar and IMU SLAM pipeline.

- **Fixed-point geometry** (`sensefuse.point_hw`): `PointHW` and `PointArith` do integer
  vector arithmetic in millimetres and map cells. Division truncates toward zero. The
  resolutions `MAP_RESOLUTION`, `WEIGHT_RESOLUTION` and `MATRIX_RESOLUTION` live in
  `sensefuse.constants`.
- **TSDF entries** (`sensefuse.tsdf_entry`): `TSDFEntry` packs a 16-bit value and a 16-bit
  weight into one 32-bit word. The value sits in the low half.
- **Messages**: `Imu` (`sensefuse.imu`), `PointCloud` (`sensefuse.point_cloud`),
  `Transform` (`sensefuse.transform`) and `TSDFMessage` (`sensefuse.tsdf_msg`) convert to
  byte frames and back. `Stamped` (`sensefuse.stamped`) pairs any of these with a timestamp
  in nanoseconds since the epoch.
- **Transport** (`sensefuse.comm`): `Sender` is a ZeroMQ publisher bound to a TCP port.
  `Receiver` is a subscriber that polls with a timeout and decodes into a given type.
- **Utilities**:
  - `ConcurrentRingBuffer` (`sensefuse.ring_buffer`) is a bounded, thread-safe FIFO.
  - `SlidingWindowFilter` (`sensefuse.filter`) keeps a moving average.
  - `EventHandlerList` (`sensefuse.event_handlers`) holds a list of callbacks.
  - `ConfigManager` (`sensefuse.config`) holds the JSON configuration, and its entries
    accept change handlers.
  - `Logger` (`sensefuse.log`) writes leveled messages to pluggable sinks.
  - `RuntimeEvaluator` (`sensefuse.runtime_evaluator`) times named, nested tasks.
  - `PCDFile` (`sensefuse.pcd_file`) reads and writes `.pcd` point cloud files.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

A thread-safe ring buffer. Non-blocking pops raise `queue.Empty` when nothing is taken:

```python
from sensefuse.ring_buffer import ConcurrentRingBuffer

buf = ConcurrentRingBuffer(2)
buf.push_nb(1)
buf.push_nb(2)
buf.push_nb(3, force=True)   # drops the oldest element
assert buf.pop() == 2
```

Fixed-point points:

```python
from sensefuse.point_hw import PointHW

p = PointHW(130, 0, -10)
print(p.to_map(), p.norm())
```

Configuration. Loaded data may be partial, and invalid data raises `ConfigError`:

```python
from sensefuse.config import ConfigManager

ConfigManager.load_string('{"slam": {"max_distance": 600}}')
print(ConfigManager.config().slam.max_distance())
print(ConfigManager.create_string())
```

Publishing and receiving stamped IMU data:

```python
from sensefuse.comm import Receiver, Sender
from sensefuse.imu import Imu
from sensefuse.stamped import Stamped

with Sender(5555) as sender, Receiver("localhost", 5555, Stamped[Imu], timeout_ms=100) as receiver:
    sender.send(Stamped(Imu()))
    msg = receiver.receive()     # None if nothing arrived within the timeout
```

Logging:

```python
from sensefuse.log import FileSink, Logger, LogLevel

Logger.set_loglevel(LogLevel.DEBUG)
Logger.add_sink(FileSink("run.log"))
Logger.info("scan ", 42, " registered")
```

Timing tasks:

```python
from sensefuse.runtime_evaluator import RuntimeEvaluator

ev = RuntimeEvaluator.get_instance()
ev.start("total")
...
ev.stop("total")
print(ev)
```

Point cloud files:

```python
from sensefuse.pcd_file import PCDFile

pcd = PCDFile("scan.pcd")
pcd.write_points([[(1.0, 2.0, 3.0)], [(4.0, 5.0, 6.0)]], binary=True)
rings, count = pcd.read_points()
```

## What this package does not do

The package has no background worker threads. Nothing moves data between a
`ConcurrentRingBuffer` and a `Sender` or `Receiver` for you. To do that, call
`Receiver.receive()` and the buffer's push and pop methods in your own loop or thread.
The package has no command-line program, no sensor drivers, and does not run the TSDF
map update itself. It provides only the data types and arithmetic that such code uses.