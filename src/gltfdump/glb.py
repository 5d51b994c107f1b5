import logging
import struct
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

GLB_MAGIC = b'glTF'
CHUNK_JSON = b'JSON'
CHUNK_BIN = b'BIN\0'
HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8


class GlbError(RuntimeError):
    pass


class InvalidSignature(GlbError):
    pass


class MissingMetadataChunk(GlbError):
    pass


class TruncatedContainer(GlbError):
    pass


class GlbChunks(NamedTuple):
    version: int
    length: int
    json: bytes
    bin: Optional[bytes]


class BytesReader:
    def __init__(self, data: bytes, end: Optional[int] = None):
        self.data = data
        self.end = len(data) if end is None else end
        self.pos = 0

    def is_end(self) -> bool:
        return self.pos >= self.end

    def read(self, size: int) -> bytes:
        if (self.pos + size) > self.end:
            raise TruncatedContainer(
                f'read {size} bytes at {self.pos} past end of {self.end} bytes')
        data = self.data[self.pos:self.pos+size]
        self.pos += size
        return data

    def read_uint(self) -> int:
        return struct.unpack('<I', self.read(4))[0]

    def read_chunk_header(self):
        chunk_length = self.read_uint()
        chunk_type = self.read(4)
        return chunk_length, chunk_type


def parse_glb(data: bytes) -> GlbChunks:
    '''
    https://www.khronos.org/registry/glTF/specs/2.0/glTF-2.0.html#glb-file-format-specification

    The first chunk must be JSON. An optional BIN chunk may follow it.
    '''
    if data[:4] != GLB_MAGIC:
        raise InvalidSignature('Invalid GLB file: missing glTF magic')
    if len(data) < HEADER_SIZE:
        raise TruncatedContainer(f'GLB header needs {HEADER_SIZE} bytes, got {len(data)}')

    r = BytesReader(data)
    r.read(4)
    # not validated
    version = r.read_uint()
    if version != 2:
        logger.warning('unexpected GLB version: %d', version)

    length = r.read_uint()
    if length > len(data):
        raise TruncatedContainer(f'declared length {length} exceeds buffer of {len(data)} bytes')
    if length < HEADER_SIZE + CHUNK_HEADER_SIZE:
        raise TruncatedContainer(f'declared length {length} cannot hold the JSON chunk header')
    r.end = length

    chunk_length, chunk_type = r.read_chunk_header()
    if chunk_type != CHUNK_JSON:
        raise MissingMetadataChunk('Invalid GLB file: first chunk is not JSON')
    json_chunk = r.read(chunk_length)

    bin_chunk = None
    if not r.is_end():
        chunk_length, chunk_type = r.read_chunk_header()
        if chunk_type == CHUNK_BIN:
            bin_chunk = r.read(chunk_length)
        else:
            logger.debug('second chunk is not BIN: %r', chunk_type)

    return GlbChunks(version, length, json_chunk, bin_chunk)
