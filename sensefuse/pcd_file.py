"""Reading and writing point clouds in the PCD file format."""

import struct

_RECORD = struct.Struct("<fffh")
_FLOAT = struct.Struct("<f")
_HEADER_LINES = 10
_WIDTH_LINE = 6


def _f32(value):
    """Round ``value`` to single precision."""
    return _FLOAT.unpack(_FLOAT.pack(float(value)))[0]


class PCDFile:
    """A PCD file holding points grouped by lidar ring (fields x, y, z, ring)."""

    def __init__(self, file_name):
        self.name = str(file_name)

    def write_points(self, points, binary=False):
        """Write ``points``, a sequence of rings each holding (x, y, z) points."""
        body = []
        width = 0
        for ring_number, ring in enumerate(points):
            for point in ring:
                x, y, z = (_f32(c) for c in point[:3])
                if binary:
                    body.append(_RECORD.pack(x, y, z, ring_number))
                else:
                    body.append(f"{x:g} {y:g} {z:g} {ring_number}\n".encode("ascii"))
                width += 1

        header = (
            "# .PCD v.7 - Point Cloud Data file format\n"
            "VERSION .7\n"
            "FIELDS x y z ring\n"
            "SIZE 4 4 4 2\n"
            "TYPE F F F I\n"
            "COUNT 1 1 1 1  \n"
            f"WIDTH {width}\n"
            "HEIGHT 1\n"
            "VIEWPOINT 0 0 0 1 0 0 0\n"
            f"POINTS {width}\n"
            f"DATA {'binary' if binary else 'ascii'}\n"
        )

        with open(self.name, "wb") as file:
            file.write(header.encode("ascii"))
            file.write(b"".join(body))

    def read_points(self):
        """Read the file.

        Returns ``(rings, number_of_points)`` where ``rings`` is a list of rings,
        each a list of (x, y, z) tuples, and ``number_of_points`` is the header's
        width. Raises :class:`ValueError` on a malformed file.
        """
        with open(self.name, "rb") as file:
            number_of_points = 0
            line = ""
            for header_line in range(1, _HEADER_LINES + 1):
                while True:
                    line = file.readline().decode("ascii", errors="replace")
                    if line.endswith("\n"):
                        line = line[:-1]
                    if not line:
                        raise ValueError(
                            f"PCD header has the wrong format at header line {header_line}"
                        )
                    if not line.startswith("#"):
                        break
                if header_line == _WIDTH_LINE:
                    number_of_points = int(line.split(" ")[-1])
            binary = "binary" in line
            data = file.read()

        records = self._binary_records(data) if binary else self._ascii_records(data)

        rings = []
        for x, y, z, ring in records:
            if ring < 0:
                raise ValueError(f"negative ring number {ring}")
            while ring >= len(rings):
                rings.append([])
            rings[ring].append((x, y, z))
        return rings, number_of_points

    @staticmethod
    def _binary_records(data):
        view = memoryview(data)
        while len(view) >= 4:
            if len(view) < 8:
                raise ValueError("y component could not be read")
            if len(view) < 12:
                raise ValueError("z component could not be read")
            if len(view) < _RECORD.size:
                raise ValueError("ring component could not be read")
            yield _RECORD.unpack(view[: _RECORD.size])
            view = view[_RECORD.size :]

    @staticmethod
    def _ascii_records(data):
        tokens = iter(data.decode("ascii", errors="replace").split())
        for token in tokens:
            try:
                x = _f32(token)
            except ValueError:
                return
            coords = [x]
            for component in ("y", "z"):
                try:
                    coords.append(_f32(next(tokens)))
                except (StopIteration, ValueError):
                    raise ValueError(f"{component} component could not be read") from None
            try:
                ring = int(next(tokens))
            except (StopIteration, ValueError):
                raise ValueError("ring component could not be read") from None
            yield coords[0], coords[1], coords[2], ring