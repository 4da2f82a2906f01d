"""Per-field code fragments shared by the packet emitters."""

from .types import Field

# Map wire types to Python type annotations
PRIMITIVE_TYPE_MAP = {
    "bool": "bool",
    "i8": "int",
    "i16": "int",
    "i32": "int",
    "i64": "int",
    "u8": "int",
    "u16": "int",
    "u32": "int",
    "u64": "int",
    "varint": "int",
    "varlong": "int",
    "f32": "float",
    "f64": "float",
    "string": "str",
    "bytes": "bytes",
    "prefixed_bytes": "bytes",
}


def annotation(field: Field) -> str:
    """Python annotation for a field, user-defined types pass through."""
    return PRIMITIVE_TYPE_MAP.get(field.type, field.type)


def declaration(field: Field) -> str:
    return f"{field.name}: {annotation(field)}"


def read_expr(field: Field) -> str:
    """Keyword argument reading the field from the stream ``r``."""
    return f"{field.name}=read_{field.codec}(r)"


def write_stmt(field: Field) -> str:
    """Statement appending the field to the ``ret`` buffer."""
    return f"write_{field.codec}(self.{field.name}, ret)"


def fn_params(fields: list[Field]) -> str:
    return ", ".join(declaration(f) for f in fields)


def init_args(fields: list[Field]) -> list[str]:
    return [f"{f.name}={f.name}" for f in fields]


def getter_doc(field: Field) -> str:
    if field.getter_doc and field.getter_doc.strip():
        return field.getter_doc
    return f"get the {field.name} field (UNDOCUMENTED)"


def codec_names(fields: list[Field], *, automatic: bool) -> set[str]:
    """Codec routines referenced by a packet's generated methods."""
    if not automatic:
        return set()
    names = {"write_varint"}
    for f in fields:
        names.add(f"read_{f.codec}")
        names.add(f"write_{f.codec}")
    return names
