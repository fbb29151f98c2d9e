# rbxdoc

`rbxdoc` reads binary Roblox model and place files (`.rbxm`, `.rbxl`) and gives
you the instance tree as plain Python objects: instances, the names of their
types, their parent and child links, and their typed property values.

Chunk bodies may be stored uncompressed, as an LZ4 block or as a Zstandard
frame; all three are handled.

## Installation

```
pip install rbxdoc
```

## Usage

```python
from rbxdoc.document import Document, LoadError
from rbxdoc.model import PropertyType

doc = Document()
try:
    doc.load_file("model.rbxm")
except LoadError:
    raise SystemExit("can't load file")

for instance in doc.instances:
    if doc.type_name(instance).lower() != "meshpart":
        continue

    for prop in instance.properties:
        if prop.type is PropertyType.STRING and prop.name.lower() == "name":
            print("Name:", prop.as_string(""))
        elif prop.type is PropertyType.CFRAME_MATRIX and prop.name.lower() == "cframe":
            cf = prop.as_cframe(None)
            print("CFrame:", cf.translation, cf.rotation)
        elif prop.type is PropertyType.VECTOR3 and prop.name.lower() == "size":
            print("Size:", prop.as_vec3(None))
```

`Document.instances` is indexed by instance id and `Document.types` by type
index. `Document.type_name` returns `""` for an instance that does not belong
to the document.

Each `rbxdoc.model.Instance` carries `id`, `parent_id` (`-1` when it has no
parent), `child_ids`, `type_index`, `is_service`, `is_service_rooted` and its
list of `properties`.

A `rbxdoc.model.Property` has a `name`, a `type` (a `PropertyType`) and a
`value`. The accessors `as_string`, `as_float`, `as_vec3` and `as_cframe`
return the value when the property has the matching type and the supplied
default otherwise; `as_cframe` also accepts `CFRAME_QUAT` and
`OPTIONAL_CFRAME` properties, and returns the default for an optional CFrame
that holds no data.

### Lower-level access

If you already have the file contents in memory, `rbxdoc.binary.parse_binary`
decodes the bytes to a `BinaryFile` (with `instances` and `type_names`), and
`rbxdoc.binary.load_binary` does the same for a path. Both raise
`rbxdoc.blob.FormatError` for malformed input. `Document.load_file` turns any
failure into a `LoadError`.

`rbxdoc.properties.read_property_values` decodes one column of property values
from a `rbxdoc.blob.BinaryBlob`, and `rbxdoc.blob` holds the byte cursor and
the low-level decoders (`decode_float`, `decode_int`, `decode_int64`,
`id_to_matrix3`, `decompress_chunk`).

## What it does not do

- The XML variants (`.rbxmx`, `.rbxlx`) are not read; `Document.load_file`
  refuses any file name ending in `x`.
- Only the `INST`, `PROP` and `PRNT` chunks are decoded. Metadata, shared
  string tables, signatures and hashes are skipped, so a `SHARED_STRING`
  property holds only its index into the shared string table, not the string.
- Property formats without a decoder (for example `UDim`, `Ray`, `Faces`,
  `Axes`, `Vector2int16`, `Vector3int16`, quaternion CFrames, `Bytecode`,
  `SecurityCapabilities` and `Content`) are recorded with type `UNKNOWN` and
  no value.
- Files are only read; nothing is written back.

## Running the tests

```
pip install -e ".[test]"
pytest
```