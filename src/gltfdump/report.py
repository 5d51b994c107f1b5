import json
import math
from typing import Any


def _is_number(v) -> bool:
    # None stands in for NaN / Infinity
    return v is None or (isinstance(v, (int, float)) and not isinstance(v, bool))


def _is_inline(v) -> bool:
    '''
    [1, 2, 3] or [[1, 2], [3, 4]]
    '''
    if not isinstance(v, list) or not v:
        return False
    if all(_is_number(x) for x in v):
        return True
    return all(isinstance(x, list) and x and all(_is_number(y) for y in x) for x in v)


def _finite(value: Any) -> Any:
    '''
    NaN and Infinity are not json. write null like JSON.stringify
    '''
    match value:
        case float() if not math.isfinite(value):
            return None
        case list():
            return [_finite(v) for v in value]
        case dict():
            return {k: _finite(v) for k, v in value.items()}
        case _:
            return value


def _dump(value: Any, indent: str) -> str:
    if _is_inline(value):
        return json.dumps(value, separators=(', ', ': '), allow_nan=False)
    match value:
        case dict() if value:
            child = indent + '  '
            items = [f'{child}{json.dumps(k)}: {_dump(v, child)}' for k, v in value.items()]
            return '{\n' + ',\n'.join(items) + '\n' + indent + '}'
        case list() if value:
            child = indent + '  '
            items = [child + _dump(v, child) for v in value]
            return '[\n' + ',\n'.join(items) + '\n' + indent + ']'
        case _:
            return json.dumps(value, allow_nan=False)


def format_report(report: dict) -> str:
    '''
    indent 2 json, numeric arrays on one line
    '''
    return _dump(_finite(report), '')
