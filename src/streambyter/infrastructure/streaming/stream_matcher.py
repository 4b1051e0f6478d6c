"""Accumulate-and-test matching over a single chunk stream."""

import codecs
from typing import Generic, Optional, TypeVar

from ...domain.models.options import ReadOptions
from ...domain.services.match_policy import MatchPolicy
from ..logging import StreambyterLogger
from .chunk_source import Chunk, ChunkStream

R = TypeVar("R")


class StreamMatcher(Generic[R]):
    """
    Matches a pattern against the cumulative content of a stream.

    Every chunk is decoded and appended to a text buffer, then the policy
    re-evaluates the whole buffer so matches spanning chunk boundaries are
    found. The first recorded match ends consumption and closes the
    stream. This re-scans the buffer on every chunk, which is quadratic
    in the stream length for streams that never match.
    """

    def __init__(self, policy: MatchPolicy[R], options: Optional[ReadOptions] = None):
        """
        Initialize the matcher.

        Args:
            policy: Decides what counts as a match and what is recorded
            options: Decoding options (defaults to UTF-8 with replacement)
        """
        self.policy = policy
        self.options = options or ReadOptions()
        self.logger = StreambyterLogger.get_instance()

    async def match(self, stream: ChunkStream) -> Optional[R]:
        """
        Consume the stream until a match is recorded or the stream ends.

        Args:
            stream: Stream to consume; it is closed before returning

        Returns:
            The recorded match, or the policy default when nothing matched
        """
        decoder = codecs.getincrementaldecoder(self.options.encoding)(errors=self.options.errors)
        content = ""
        chunks = 0

        try:
            async for chunk in stream:
                chunks += 1
                content += self._decode(decoder, chunk)

                result = self.policy.evaluate(content)
                if result is not None:
                    self.logger.debug(
                        f"Match found in {stream.name}",
                        extra={"mode": self.policy.mode.value, "chunks": chunks},
                    )
                    return result

            # Flush bytes the decoder held back waiting for a complete character
            tail = decoder.decode(b"", final=True)
            if tail:
                content += tail
                result = self.policy.evaluate(content)
                if result is not None:
                    return result

            self.logger.debug(
                f"No match in {stream.name}",
                extra={"mode": self.policy.mode.value, "chunks": chunks},
            )
            return self.policy.default

        finally:
            await self._close_quietly(stream)

    @staticmethod
    def _decode(decoder: codecs.IncrementalDecoder, chunk: Chunk) -> str:
        if isinstance(chunk, str):
            return chunk
        return decoder.decode(bytes(chunk))

    async def _close_quietly(self, stream: ChunkStream):
        try:
            await stream.close()
        except Exception as e:
            self.logger.debug(
                f"Ignoring close failure for {stream.name}",
                extra={"error": str(e)},
            )
