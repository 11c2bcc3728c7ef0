"""Write sinks handed out by ObjectStoreBaseDAO.write_stream()

Classes:
    BufferedSink:
        Collects written bytes in memory until the owning store commits them.

    DiscardingSink:
        Accepts and acknowledges writes without keeping anything.
"""

import io


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode('utf-8') if isinstance(data, str) else bytes(data)


class BufferedSink:
    """In-memory sink committed to the object store on scope exit."""

    def __init__(self):
        self._buffer = io.BytesIO()
        self.closed = False

    def write(self, data: bytes | str) -> int:
        if self.closed:
            raise ValueError('write to a closed sink')
        return self._buffer.write(_as_bytes(data))

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()

    def close(self) -> None:
        self.closed = True


class DiscardingSink:
    """Sink that swallows every byte written to it."""

    def __init__(self):
        self.closed = False

    def write(self, data: bytes | str) -> int:
        if self.closed:
            raise ValueError('write to a closed sink')
        return len(_as_bytes(data))

    def close(self) -> None:
        self.closed = True
