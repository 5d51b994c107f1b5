import struct
from typing import List, Optional, Sequence
from .types import (AccessorType, ComponentType, DecodedAccessor, DecodedValues,
                    DecodeError, Group, Number)


TRUNCATE_LIMIT = 20


def group_values(values: Sequence[Number], element_count: int) -> List[Group]:
    '''
    SCALAR: [1, 2, 3]
    VEC2: [[1, 2], [3, 4]]

    MAT is kept in stored (column major) order.
    '''
    if element_count == 1:
        return list(values)
    return [list(values[i:i+element_count]) for i in range(0, len(values), element_count)]


def unpack_components(component_type: ComponentType, data: bytes) -> List[Number]:
    # little endian regardless of host
    count = len(data) // component_type.size
    return list(struct.unpack_from(f'<{count}{component_type.format}', data))


def decode_accessor(gltf_accessor: dict, gltf_buffer_view: Optional[dict], bin: bytes, *,
                    limit: int = TRUNCATE_LIMIT) -> DecodedAccessor:
    '''
    gltf_buffer_view が None の場合は zero filled
    '''
    component_type = ComponentType.from_code(gltf_accessor.get('componentType'))
    if component_type is None:
        return DecodeError(f'Unknown component type: {gltf_accessor.get("componentType")}')
    accessor_type = AccessorType.from_name(gltf_accessor.get('type'))
    if accessor_type is None:
        return DecodeError(f'Unknown accessor type: {gltf_accessor.get("type")}')

    count = gltf_accessor['count']
    element_size = component_type.size * accessor_type.element_count
    length = count * element_size
    if gltf_buffer_view is None:
        data = b'\0' * length
    else:
        offset = gltf_buffer_view.get('byteOffset', 0) + gltf_accessor.get('byteOffset', 0)
        data = bin[offset:offset+length]

    groups = group_values(unpack_components(component_type, data), accessor_type.element_count)
    truncated = len(groups) > limit
    if truncated:
        groups = groups[:limit]

    return DecodedValues(accessor_type, component_type, count,
                         gltf_accessor.get('min'), gltf_accessor.get('max'),
                         groups, truncated)
