"""Reader for the chunked binary place and model format."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, Union

from .blob import BinaryBlob, FormatError, decompress_chunk
from .model import Instance, Property
from .properties import read_property_values

_MAGIC = b"<roblox!"
_SIGNATURE = b"\x89\xff\x0d\x0a\x1a\x0a"
_FILE_HEADER = struct.Struct("<8s6sHII8x")
_CHUNK_HEADER = struct.Struct("<4sIII")

_CHUNK_INSTANCES = b"INST"
_CHUNK_PROPERTY = b"PROP"
_CHUNK_PARENTS = b"PRNT"
_CHUNK_END = b"END\0"


class _ObjectFormat(IntEnum):
    PLAIN = 0
    SERVICE_TYPE = 1


class _ParentLinkFormat(IntEnum):
    PLAIN = 0


@dataclass
class BinaryFile:
    """The instances and type names decoded from a binary document."""

    instances: list[Instance] = field(default_factory=list)
    type_names: list[str] = field(default_factory=list)


def _read_chunk_body(blob: BinaryBlob, compressed_size: int, size: int) -> bytes:
    if size == 0:
        return b""
    if compressed_size == 0:
        return blob.read(size)
    return decompress_chunk(blob.read(compressed_size), size)


def _read_instances(chunk: BinaryBlob, doc: BinaryFile) -> None:
    type_index = chunk.read_u32()
    type_name = chunk.read_string()
    fmt = chunk.read_u8()
    if fmt not in (_ObjectFormat.PLAIN, _ObjectFormat.SERVICE_TYPE):
        raise FormatError("Unrecognized object format")

    ids = chunk.read_id_vector(chunk.read_u32())
    is_service = fmt == _ObjectFormat.SERVICE_TYPE
    if is_service:
        rooted = [byte != 0 for byte in chunk.read(len(ids))]
    else:
        rooted = [False] * len(ids)

    if type_index >= len(doc.type_names):
        raise FormatError("Incorrect type index")
    doc.type_names[type_index] = type_name

    for instance_id, is_rooted in zip(ids, rooted):
        if not 0 <= instance_id < len(doc.instances):
            raise FormatError("Incorrect instance index")
        doc.instances[instance_id] = Instance(
            parent_id=-1,
            id=instance_id,
            type_index=type_index,
            is_service=is_service,
            is_service_rooted=is_rooted,
        )


def _read_properties(chunk: BinaryBlob, doc: BinaryFile) -> None:
    type_index = chunk.read_u32()
    name = chunk.read_string()
    fmt = chunk.read_u8()

    owners = [inst for inst in doc.instances if inst.type_index == type_index]
    kind, values = read_property_values(chunk, fmt, len(owners))
    for inst, value in zip(owners, values):
        inst.properties.append(Property(name, kind, value))


def _read_parents(chunk: BinaryBlob, doc: BinaryFile) -> None:
    if chunk.read_u8() != _ParentLinkFormat.PLAIN:
        raise FormatError("Unrecognized parent link format")

    count = chunk.read_u32()
    child_ids = chunk.read_id_vector(count)
    parent_ids = chunk.read_id_vector(count)

    for child_id, parent_id in zip(child_ids, parent_ids):
        if not 0 <= child_id < len(doc.instances):
            raise FormatError("Invalid child index")
        doc.instances[child_id].parent_id = parent_id if parent_id >= 0 else -1
        if parent_id >= 0:
            if parent_id >= len(doc.instances):
                raise FormatError("Invalid parent index")
            doc.instances[parent_id].child_ids.append(child_id)


_HANDLERS: Dict[bytes, Callable[[BinaryBlob, BinaryFile], None]] = {
    _CHUNK_INSTANCES: _read_instances,
    _CHUNK_PROPERTY: _read_properties,
    _CHUNK_PARENTS: _read_parents,
}


def parse_binary(data: bytes) -> BinaryFile:
    """Decode a binary document held in memory.

    Raises FormatError when the data is not a supported document or is corrupt.
    """
    blob = BinaryBlob(data)
    magic, signature, version, type_count, object_count = _FILE_HEADER.unpack(
        blob.read(_FILE_HEADER.size)
    )
    if magic != _MAGIC:
        raise FormatError("Unrecognized format")
    if signature != _SIGNATURE:
        raise FormatError("The file header is corrupted, unexpected signature")
    if version != 0:
        raise FormatError("Unrecognized version")

    doc = BinaryFile(
        instances=[Instance() for _ in range(object_count)],
        type_names=[""] * type_count,
    )

    while blob.tell() < len(blob):
        name, compressed_size, size, _reserved = _CHUNK_HEADER.unpack(
            blob.read(_CHUNK_HEADER.size)
        )
        body = _read_chunk_body(blob, compressed_size, size)
        if name == _CHUNK_END:
            break
        handler = _HANDLERS.get(name)
        if handler is not None:
            handler(BinaryBlob(body), doc)

    return doc


def load_binary(path: Union[str, "os.PathLike[str]"]) -> BinaryFile:
    """Read and decode a binary document from a file."""
    with open(path, "rb") as stream:
        data = stream.read()
    return parse_binary(data)