'''
https://github.com/KhronosGroup/glTF/blob/main/specification/2.0/#accessor-data-types
'''
from typing import NamedTuple, Optional, List, Union, Any
from enum import Enum


class GltfError(RuntimeError):
    pass


class BinaryDataRequired(GltfError):
    pass


class UnsupportedInput(GltfError):
    pass


class ComponentType(Enum):
    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    UNSIGNED_INT = 5125
    FLOAT = 5126

    @property
    def format(self) -> str:
        '''
        struct format character (standard size)
        '''
        match self:
            case ComponentType.BYTE:
                return 'b'
            case ComponentType.UNSIGNED_BYTE:
                return 'B'
            case ComponentType.SHORT:
                return 'h'
            case ComponentType.UNSIGNED_SHORT:
                return 'H'
            case ComponentType.UNSIGNED_INT:
                return 'I'
            case ComponentType.FLOAT:
                return 'f'

    @property
    def size(self) -> int:
        match self:
            case ComponentType.BYTE | ComponentType.UNSIGNED_BYTE:
                return 1
            case ComponentType.SHORT | ComponentType.UNSIGNED_SHORT:
                return 2
            case ComponentType.UNSIGNED_INT | ComponentType.FLOAT:
                return 4

    @staticmethod
    def from_code(code) -> Optional['ComponentType']:
        try:
            return ComponentType(code)
        except ValueError:
            return None


class AccessorType(Enum):
    SCALAR = 'SCALAR'
    VEC2 = 'VEC2'
    VEC3 = 'VEC3'
    VEC4 = 'VEC4'
    MAT2 = 'MAT2'
    MAT3 = 'MAT3'
    MAT4 = 'MAT4'

    @property
    def element_count(self) -> int:
        match self:
            case AccessorType.SCALAR:
                return 1
            case AccessorType.VEC2:
                return 2
            case AccessorType.VEC3:
                return 3
            case AccessorType.VEC4 | AccessorType.MAT2:
                return 4
            case AccessorType.MAT3:
                return 9
            case AccessorType.MAT4:
                return 16

    @staticmethod
    def from_name(name) -> Optional['AccessorType']:
        try:
            return AccessorType(name)
        except ValueError:
            return None


Number = Union[int, float]
Group = Union[Number, List[Number]]


class DecodedValues(NamedTuple):
    type: AccessorType
    component_type: ComponentType
    count: int
    min: Optional[List[Number]]
    max: Optional[List[Number]]
    # SCALAR は数値, それ以外は element_count 個のリスト
    groups: List[Group]
    truncated: bool = False

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            'type': self.type.value,
            'componentType': self.component_type.name,
            'count': self.count,
        }
        if self.min is not None:
            result['min'] = self.min
        if self.max is not None:
            result['max'] = self.max
        if self.truncated:
            result['truncatedValues'] = self.groups
        else:
            result['values'] = self.groups
        return result


class DecodeError(NamedTuple):
    message: str

    def to_dict(self) -> dict:
        return {'error': self.message}


DecodedAccessor = Union[DecodedValues, DecodeError]
