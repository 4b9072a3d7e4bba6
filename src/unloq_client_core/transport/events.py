"""Parsing of evented gateway responses.

An evented response body is a sequence of frames, each a JSON object
wrapped in newlines::

    \\n{"event": "step", "data": {"n": 1}}\\n

A bare ``\\n`` or a single space is a keep-alive ping. The parser buffers
bytes between delimiters, so a frame split across several network chunks,
or several frames delivered in one chunk, decode the same way. JSON spread
over several lines is accepted; a blank line closes a frame.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from unloq_client_core.errors.exceptions import InvalidResponseError

logger = logging.getLogger(__name__)

FRAME_DELIMITER = b"\n"
PING_CHUNKS: frozenset[bytes] = frozenset([b"\n", b" "])
ERROR_EVENT = "error"


@dataclass
class EventFrame:
    """One named event decoded from the stream."""

    name: str
    payload: Any = None


class EventChunkParser:
    """Incremental frame decoder for one evented response.

    Example:
        ```python
        parser = EventChunkParser()
        async for chunk in response.aiter_bytes():
            for frame in parser.feed(chunk):
                print(frame.name, frame.payload)
        frames = parser.flush()
        ```
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        # Terminated lines of a frame whose JSON has not decoded yet
        self._pending = bytearray()
        # Set once a delimiter has been seen; text before it is noise
        self._framed = False

    def feed(self, chunk: bytes) -> list[EventFrame]:
        """Consume one raw chunk and return the frames it completed."""
        idle = not self._buffer and not self._pending
        if idle and chunk in PING_CHUNKS:
            self._framed = self._framed or chunk == FRAME_DELIMITER
            return []

        if idle and self._is_whole_frame(chunk):
            interior = chunk[len(FRAME_DELIMITER) : -len(FRAME_DELIMITER)]
            try:
                decoded = json.loads(interior)
            except ValueError as e:
                if FRAME_DELIMITER not in interior:
                    self._framed = True
                    return [self._decode_error(e, interior)]
                # Several frames in one chunk; fall through to line splitting
            else:
                self._framed = True
                return [self._to_frame(decoded)]

        self._buffer.extend(chunk)
        frames = []

        while True:
            index = self._buffer.find(FRAME_DELIMITER)
            if index < 0:
                break

            line = bytes(self._buffer[:index])
            del self._buffer[: index + len(FRAME_DELIMITER)]

            framed = self._framed
            self._framed = True

            if not line.strip():
                # Blank line closes a frame
                if self._pending:
                    frames.append(self._close_pending())
                continue
            if not framed:
                logger.debug(f"Dropping {len(line)} bytes received before the first frame delimiter")
                continue

            if self._pending:
                self._pending.extend(FRAME_DELIMITER)
            self._pending.extend(line)
            try:
                decoded = json.loads(self._pending)
            except ValueError:
                # JSON may continue on the next line
                continue
            self._pending.clear()
            frames.append(self._to_frame(decoded))

        return frames

    def flush(self) -> list[EventFrame]:
        """Finish the stream.

        A terminated frame that never decoded becomes an error frame; an
        unterminated trailing fragment is discarded.
        """
        frames = []
        if self._pending:
            frames.append(self._close_pending())
        if self._buffer.strip():
            logger.debug(f"Dropping unterminated event fragment of {len(self._buffer)} bytes")
        self._buffer.clear()
        return frames

    @staticmethod
    def _is_whole_frame(chunk: bytes) -> bool:
        return (
            len(chunk) > 2 * len(FRAME_DELIMITER)
            and chunk.startswith(FRAME_DELIMITER)
            and chunk.endswith(FRAME_DELIMITER)
            and bool(chunk.strip())
        )

    def _close_pending(self) -> EventFrame:
        text = bytes(self._pending)
        self._pending.clear()
        try:
            decoded = json.loads(text)
        except ValueError as e:
            return self._decode_error(e, text)
        return self._to_frame(decoded)

    @staticmethod
    def _decode_error(error: ValueError, text: bytes) -> EventFrame:
        logger.warning(f"Failed to parse event chunk: {error}")
        return EventFrame(
            ERROR_EVENT,
            InvalidResponseError(message=str(error), data=text.decode("utf-8", errors="replace")),
        )

    @staticmethod
    def _to_frame(decoded: Any) -> EventFrame:
        if not isinstance(decoded, dict) or not isinstance(decoded.get("event"), str):
            logger.warning("Failed to parse event chunk: event name missing from response")
            return EventFrame(
                ERROR_EVENT,
                InvalidResponseError(message="Event name missing from response", data=decoded),
            )

        return EventFrame(decoded["event"], decoded.get("data"))
