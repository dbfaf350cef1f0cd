"""
Schema-driven message codec.

Encodes and decodes plain dict values (wire field names, e.g.
``{"transactionFee": 100}``) against the schema registry. Encoding is
canonical: fields in ascending field-number order, proto3 default values
omitted, repeated fields in caller order. Every encode is preceded by a
schema check and every decode is re-validated, so neither direction ever
produces a partial value.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Mapping

from ..runtime.errors import EncodingError, SchemaViolation
from .reader import BinaryReader
from .schema import INT_RANGES, FieldSpec, MessageSpec, lookup
from .writer import WIRE_LEN, WIRE_VARINT, BinaryWriter

logger = logging.getLogger(__name__)

_DEFAULTS = {
    "int32": 0,
    "int64": 0,
    "uint64": 0,
    "sint64": 0,
    "bool": False,
    "string": "",
    "bytes": b"",
}


def _is_default(spec: FieldSpec, value: Any) -> bool:
    if value is None:
        return True
    if spec.kind == "message":
        return False
    default = _DEFAULTS[spec.kind]
    # type-strict so that e.g. False in an int64 field still reaches the type check
    return type(value) is type(default) and value == default


def _check_scalar(spec: FieldSpec, value: Any, path: str, issues: List[str]) -> None:
    kind = spec.kind
    if kind in INT_RANGES:
        if isinstance(value, bool) or not isinstance(value, int):
            issues.append(f"{path}: {kind} expected, got {type(value).__name__}")
            return
        lo, hi = INT_RANGES[kind]
        if not lo <= value <= hi:
            issues.append(f"{path}: {value} out of range for {kind}")
    elif kind == "bool":
        if not isinstance(value, bool):
            issues.append(f"{path}: bool expected, got {type(value).__name__}")
    elif kind == "string":
        if not isinstance(value, str):
            issues.append(f"{path}: string expected, got {type(value).__name__}")
    elif kind == "bytes":
        if not isinstance(value, (bytes, bytearray)):
            issues.append(f"{path}: bytes expected, got {type(value).__name__}")


def verify_message(type_name: str, value: Any, path: str = "") -> List[str]:
    """
    Check a dict value against the named message schema.

    Args:
        type_name: Message type in the schema registry
        value: Mapping of wire field names to values
        path: Prefix used in issue messages

    Returns:
        List of human readable issues; empty if the value is valid
    """
    spec = lookup(type_name)
    where = path or type_name
    if not isinstance(value, Mapping):
        return [f"{where}: object expected, got {type(value).__name__}"]

    issues: List[str] = []
    for key in value:
        if spec.by_name(key) is None:
            issues.append(f"{where}.{key}: unknown field")

    oneofs: Dict[str, List[str]] = {}
    for f in spec.fields:
        field_path = f"{where}.{f.name}"
        item = value.get(f.name)
        if f.repeated:
            if item is None:
                item = ()
            if isinstance(item, (str, bytes, Mapping)) or not isinstance(item, (list, tuple)):
                issues.append(f"{field_path}: list expected, got {type(item).__name__}")
                continue
            for i, element in enumerate(item):
                _verify_element(f, element, f"{field_path}[{i}]", issues)
            continue

        if _is_default(f, item):
            if f.required:
                issues.append(f"{field_path}: required field is missing")
            continue
        if f.oneof:
            oneofs.setdefault(f.oneof, []).append(f.name)
        _verify_element(f, item, field_path, issues)

    for group, names in oneofs.items():
        if len(names) > 1:
            issues.append(f"{where}: oneof '{group}' has multiple fields set: {', '.join(names)}")
    return issues


def _verify_element(spec: FieldSpec, value: Any, path: str, issues: List[str]) -> None:
    if spec.kind == "message":
        issues.extend(verify_message(spec.message, value, path))
    else:
        _check_scalar(spec, value, path, issues)


def _write_field(writer: BinaryWriter, spec: FieldSpec, value: Any) -> None:
    writer.tag(spec.number, spec.wire_type)
    kind = spec.kind
    if kind == "message":
        writer.len_prefixed_bytes(_encode_fields(lookup(spec.message), value))
    elif kind == "string":
        writer.len_prefixed_bytes(value.encode("utf-8"))
    elif kind == "bytes":
        writer.len_prefixed_bytes(bytes(value))
    elif kind == "sint64":
        writer.svarint(value)
    elif kind == "bool":
        writer.uvarint(1 if value else 0)
    else:
        writer.uvarint(value)


def _encode_fields(spec: MessageSpec, value: Mapping[str, Any]) -> bytes:
    writer = BinaryWriter()
    for f in spec.fields:
        item = value.get(f.name)
        if f.repeated:
            for element in item or ():
                _write_field(writer, f, element)
        elif not _is_default(f, item):
            _write_field(writer, f, item)
    return writer.to_bytes()


def encode_message(type_name: str, value: Mapping[str, Any]) -> bytes:
    """
    Encode a dict value to canonical bytes.

    Args:
        type_name: Message type in the schema registry
        value: Mapping of wire field names to values

    Returns:
        Canonical encoding

    Raises:
        SchemaViolation: If the value does not match the schema
    """
    issues = verify_message(type_name, value)
    if issues:
        raise SchemaViolation(f"{type_name} failed schema validation", issues)
    data = _encode_fields(lookup(type_name), value)
    logger.debug("Encoded %s (%d bytes)", type_name, len(data))
    return data


def _to_signed(value: int, bits: int) -> int:
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _read_scalar(reader: BinaryReader, spec: FieldSpec, path: str) -> Any:
    kind = spec.kind
    if kind == "string":
        raw = reader.len_prefixed_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"{path}: invalid UTF-8", cause=e) from e
    if kind == "bytes":
        return reader.len_prefixed_bytes()
    if kind == "sint64":
        return reader.svarint()
    raw = reader.uvarint()
    if kind == "bool":
        if raw > 1:
            raise EncodingError(f"{path}: boolean value {raw} is not 0 or 1")
        return raw == 1
    if kind == "uint64":
        return raw
    value = _to_signed(raw, 64)
    if kind == "int32":
        lo, hi = INT_RANGES["int32"]
        if not lo <= value <= hi:
            raise EncodingError(f"{path}: {value} out of range for int32")
    return value


def _decode_fields(spec: MessageSpec, data: bytes, path: str, raw_fields: Iterable[str] = ()) -> Dict[str, Any]:
    reader = BinaryReader(data)
    out: Dict[str, Any] = {}
    oneof_seen: Dict[str, str] = {}
    raw_fields = frozenset(raw_fields)

    while not reader.eof:
        number, wire_type = reader.tag()
        f = spec.by_number(number)
        if f is None:
            raise EncodingError(f"{path}: unknown field number {number}")
        field_path = f"{path}.{f.name}"
        if wire_type != f.wire_type:
            raise EncodingError(
                f"{field_path}: wire type {wire_type} does not match expected {f.wire_type}"
            )
        if not f.repeated and f.name in out:
            raise EncodingError(f"{field_path}: duplicate field")
        if f.oneof:
            other = oneof_seen.get(f.oneof)
            if other is not None and other != f.name:
                raise EncodingError(f"{path}: oneof '{f.oneof}' has both {other} and {f.name}")
            oneof_seen[f.oneof] = f.name

        if f.kind == "message":
            payload = reader.len_prefixed_bytes()
            if f.name in raw_fields:
                value = payload
            else:
                value = _decode_fields(lookup(f.message), payload, field_path)
        else:
            value = _read_scalar(reader, f, field_path)

        if f.repeated:
            out.setdefault(f.name, []).append(value)
        else:
            out[f.name] = value

    missing = [
        f.name for f in spec.fields
        if f.required and not f.repeated and _is_default(f, out.get(f.name))
    ]
    if missing:
        raise EncodingError(
            f"{path}: missing required field(s): {', '.join(missing)}",
            details={"missing": missing},
        )
    return out


def decode_message(type_name: str, data: bytes, raw_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Decode bytes into a dict value.

    Args:
        type_name: Message type in the schema registry
        data: Encoded message
        raw_fields: Top-level message fields to return as undecoded bytes

    Returns:
        Mapping of wire field names to values; absent fields are omitted

    Raises:
        EncodingError: If the bytes are malformed or violate the schema
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise EncodingError(f"{type_name}: bytes expected, got {type(data).__name__}")
    return _decode_fields(lookup(type_name), bytes(data), type_name, raw_fields)


__all__ = ["verify_message", "encode_message", "decode_message"]
