import logging
import pathlib
import re
from typing import Optional, Dict, Any
from .accessor import TRUNCATE_LIMIT, decode_accessor
from .types import BinaryDataRequired, DecodeError, DecodedAccessor, GltfError

logger = logging.getLogger(__name__)

DATA_URI = re.compile(r'^data:([^;]*);base64,(.*)')


def _omit_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


class GltfBufferReader:
    def __init__(self, gltf, path: Optional[pathlib.Path], bin: Optional[bytes]):
        self.gltf = gltf
        self.bin = bin
        self.path = path

    def uri_bytes(self, uri: str) -> bytes:
        if uri.startswith('data:'):
            m = DATA_URI.match(uri)
            if not m:
                raise GltfError(f'invalid data uri: {uri[:32]}')
            import base64
            return base64.b64decode(m[2])
        elif self.path:
            import urllib.parse
            path = self.path.parent / urllib.parse.unquote(uri)
            logger.debug('read buffer: %s', path)
            return path.read_bytes()
        else:
            raise GltfError(f'no base path to resolve: {uri}')

    def buffer_bytes(self, buffer_index: int = 0) -> bytes:
        if self.bin is not None and buffer_index == 0:
            # glb bin_chunk
            return self.bin

        buffers = self.gltf.get('buffers') or []
        if buffer_index >= len(buffers):
            raise GltfError('GLTF file does not reference a binary file')
        uri = buffers[buffer_index].get('uri')
        if not isinstance(uri, str):
            raise GltfError('GLTF file does not reference a binary file')

        return self.uri_bytes(uri)


class GltfReport:
    def __init__(self, gltf, bin: Optional[bytes], *, limit: int = TRUNCATE_LIMIT):
        self.gltf = gltf
        self.bin = bin
        self.limit = limit

    def _metadata(self) -> dict:
        asset = self.gltf.get('asset') or {}
        return _omit_none({
            'generator': asset.get('generator') or 'Unknown',
            'version': asset.get('version') or 'Unknown',
            'totalBytes': len(self.bin) if self.bin is not None else None,
            'meshCount': len(self.gltf.get('meshes') or []),
            'materialCount': len(self.gltf.get('materials') or []),
            'accessorCount': len(self.gltf.get('accessors') or []),
            'truncationLimit': self.limit,
        })

    def _material(self, i: int, gltf_material) -> dict:
        pbr = gltf_material.get('pbrMetallicRoughness') or {}
        return _omit_none({
            'index': i,
            'name': gltf_material.get('name'),
            'doubleSided': gltf_material.get('doubleSided'),
            'baseColor': pbr.get('baseColorFactor'),
            'metallic': pbr.get('metallicFactor'),
            'roughness': pbr.get('roughnessFactor'),
        })

    def read_accessor(self, accessor_index: int) -> DecodedAccessor:
        gltf_accessor = self.gltf['accessors'][accessor_index]
        gltf_buffer_view = None
        match gltf_accessor:
            case {'bufferView': buffer_view_index}:
                if self.bin is None:
                    raise BinaryDataRequired('GLB file does not contain binary data')
                gltf_buffer_view = self.gltf['bufferViews'][buffer_view_index]
        decoded = decode_accessor(gltf_accessor, gltf_buffer_view, self.bin or b'', limit=self.limit)
        if isinstance(decoded, DecodeError):
            logger.warning('accessor %d: %s', accessor_index, decoded.message)
        return decoded

    def _material_name(self, gltf_prim) -> str:
        match gltf_prim:
            case {'material': material_index}:
                materials = self.gltf.get('materials')
                if materials is None:
                    return 'No Material'
                if isinstance(material_index, int) and 0 <= material_index < len(materials):
                    return materials[material_index].get('name') or 'Unknown Material'
                return 'Unknown Material'
            case _:
                return 'No Material'

    def _primitive(self, gltf_prim) -> dict:
        prim: Dict[str, Any] = _omit_none({
            'materialIndex': gltf_prim.get('material'),
            'materialName': self._material_name(gltf_prim),
        })
        prim['attributes'] = {k: self.read_accessor(v).to_dict()
                              for k, v in gltf_prim.get('attributes', {}).items()}
        match gltf_prim:
            case {'indices': accessor}:
                prim['indices'] = self.read_accessor(accessor).to_dict()
        return prim

    def _mesh(self, i: int, gltf_mesh) -> dict:
        logger.debug('mesh %d: %d primitives', i, len(gltf_mesh.get('primitives', [])))
        return _omit_none({
            'name': gltf_mesh.get('name'),
            'primitives': [self._primitive(p) for p in gltf_mesh.get('primitives', [])],
        })

    def build(self) -> dict:
        return {
            'metadata': self._metadata(),
            'materials': [self._material(i, m) for i, m in enumerate(self.gltf.get('materials') or [])],
            'meshes': [self._mesh(i, m) for i, m in enumerate(self.gltf.get('meshes') or [])],
        }


def build_report(gltf, bin: Optional[bytes], *, limit: int = TRUNCATE_LIMIT) -> dict:
    return GltfReport(gltf, bin, limit=limit).build()


def parse_gltf(json_chunk: bytes | str):
    import json
    gltf = json.loads(json_chunk)
    if not isinstance(gltf, dict):
        raise GltfError('glTF json is not an object')
    return gltf
