"""Conversion between record objects and the JSON lines of RANDOM files."""

import datetime
from typing import Any, Dict, Optional
from pseudo.errors import Position, fail
from pseudo.types import ArrayVal, Cell, EnumVal, FieldProp, ObjectVal, TypeSpec, type_name


def record_to_json(obj: ObjectVal, pos: Optional[Position] = None) -> Dict[str, Any]:
    data = {}
    for name, prop in obj.props.items():
        if not isinstance(prop, FieldProp):
            raise fail('TypeMismatch', f'{obj.type_name} has methods and cannot be stored as a record', pos)
        data[name] = _to_json(prop.cell.value, pos)
    return data


def _to_json(value: Any, pos: Optional[Position]) -> Any:
    if isinstance(value, ObjectVal):
        return record_to_json(value, pos)
    if isinstance(value, ArrayVal):
        return [_to_json(cell.value, pos) for cell in value.cells]
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, EnumVal):
        return value.name
    if isinstance(value, (bool, int, float, str)):
        return value
    raise fail('TypeMismatch', f'a {type_name(value)} cannot be stored in a record', pos)


def fill_record(obj: ObjectVal, data: Dict[str, Any], defs: Any, pos: Optional[Position] = None):
    """Overwrite the fields of `obj` with the values decoded from `data`."""
    for name, prop in obj.props.items():
        if not isinstance(prop, FieldProp):
            raise fail('TypeMismatch', f'{obj.type_name} has methods and cannot be read as a record', pos)
        if name not in data:
            raise fail('InvalidRecord', f'stored record has no field {name}', pos)
        _fill(prop.cell, data[name], name, defs, pos)


def _mismatch(name: str, spec: TypeSpec, pos: Optional[Position]):
    return fail('TypeMismatch', f'stored value of field {name} is not {spec!r}', pos)


def _fill(cell: Cell, raw: Any, name: str, defs: Any, pos: Optional[Position]):
    spec = cell.spec
    current = cell.value
    if spec.kind == 'Array':
        if not isinstance(raw, list) or len(raw) != len(current.cells):
            raise _mismatch(name, spec, pos)
        for elem, item in zip(current.cells, raw):
            _fill(elem, item, name, defs, pos)
        return
    if spec.kind == 'Custom':
        if isinstance(current, ObjectVal) and isinstance(raw, dict):
            fill_record(current, raw, defs, pos)
        elif isinstance(current, EnumVal) and isinstance(raw, str):
            cell.value = EnumVal(current.family, _variant(defs.lookup(current.family, pos), raw, name, spec, pos))
        else:
            raise _mismatch(name, spec, pos)
        return
    cell.value = _primitive(raw, spec, name, pos)


def _variant(defn: Any, raw: str, name: str, spec: TypeSpec, pos: Optional[Position]) -> str:
    for variant in defn.variants:
        if variant.lower() == raw.lower():
            return variant
    raise _mismatch(name, spec, pos)


def _primitive(raw: Any, spec: TypeSpec, name: str, pos: Optional[Position]) -> Any:
    kind = spec.kind
    if kind == 'Integer' and isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if kind == 'Real' and isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    if kind == 'Boolean' and isinstance(raw, bool):
        return raw
    if kind == 'String' and isinstance(raw, str):
        return raw
    if kind == 'Char' and isinstance(raw, str) and len(raw) <= 1:
        return raw
    if kind == 'Date' and isinstance(raw, str):
        try:
            return datetime.date.fromisoformat(raw)
        except ValueError:
            pass
    raise _mismatch(name, spec, pos)
