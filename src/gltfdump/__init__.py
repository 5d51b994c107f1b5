import logging
import pathlib
from typing import Optional, Tuple
from .accessor import TRUNCATE_LIMIT
from .glb import GlbError, parse_glb
from .parser import GltfBufferReader, build_report, parse_gltf
from .report import format_report
from .types import BinaryDataRequired, GltfError, UnsupportedInput

logger = logging.getLogger(__name__)


def load_path(path: pathlib.Path, *, require_binary: bool = True) -> Tuple[dict, Optional[bytes]]:
    '''
    load glb or gltf(+bin)
    '''
    match path.suffix.lower():
        case '.glb':
            chunks = parse_glb(path.read_bytes())
            gltf = parse_gltf(chunks.json)
            if chunks.bin is None and require_binary:
                raise BinaryDataRequired('GLB file does not contain binary data')
            return gltf, chunks.bin
        case '.gltf':
            gltf = parse_gltf(path.read_bytes())
            buffers = gltf.get('buffers') or []
            if not require_binary and (not buffers or not isinstance(buffers[0].get('uri'), str)):
                return gltf, None
            return gltf, GltfBufferReader(gltf, path, None).buffer_bytes(0)
        case _:
            raise UnsupportedInput('Input file must be either .gltf or .glb')


def extract_path(path: pathlib.Path, *, limit: int = TRUNCATE_LIMIT, require_binary: bool = True) -> dict:
    gltf, bin = load_path(path, require_binary=require_binary)
    logger.info('%s: %d meshes, %d accessors', path.name,
                len(gltf.get('meshes') or []), len(gltf.get('accessors') or []))
    return build_report(gltf, bin, limit=limit)
