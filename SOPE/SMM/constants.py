# =============================================================================
# constants.py — SMM Format Constants and Type-Tag Map
# =============================================================================
#
# Source: Action Message Format (AMF0 / AMF3) as written by the Flash Player
# and AIR runtimes for local shared objects (.sol files).
# All multi-byte fixed-width fields are BIG-ENDIAN.

# -----------------------------------------------------------------------------
# PREAMBLE LAYOUT  (16 bytes, then the length-prefixed document name)
# -----------------------------------------------------------------------------
#
#   offset  size  field
#   ------  ----  -----------------------------------------------------------
#     0      2    reserved (magic 0x00BF in Flash files, not checked)
#     2      4    declared length L  (bytes AFTER this field)
#     6      4    reserved ("TCSO" marker, not checked)
#    10      2    reserved
#    12      4    reserved
#    16      2    document name length N
#    18      N    document name, UTF-8
#  18+N      4    type marker (AMF version, kept for diagnostics only)
#
# Logical end-of-document = offset right after L + L = 6 + L.

PREAMBLE_RESERVED_1_SIZE = 2
DECLARED_LENGTH_SIZE     = 4
PREAMBLE_RESERVED_2_SIZE = 4
PREAMBLE_RESERVED_3_SIZE = 2
PREAMBLE_RESERVED_4_SIZE = 4
PREAMBLE_SIZE = (
    PREAMBLE_RESERVED_1_SIZE + DECLARED_LENGTH_SIZE
    + PREAMBLE_RESERVED_2_SIZE + PREAMBLE_RESERVED_3_SIZE
    + PREAMBLE_RESERVED_4_SIZE
)   # = 16

# Where the declared length starts counting from
DECLARED_LENGTH_BASE = PREAMBLE_RESERVED_1_SIZE + DECLARED_LENGTH_SIZE   # = 6


# -----------------------------------------------------------------------------
# EXPANDABLE INTEGER  (29-bit VarInt)
# -----------------------------------------------------------------------------
# Up to 3 leading bytes carry 7 data bits each (MSB = "more follows").
# If all 3 continue, a 4th byte carries a full 8 bits with no flag.
# Only the 4-byte form (29 data bits) can be negative.

VARINT_GROUP_BITS    = 7
VARINT_MAX_GROUPS    = 3         # 7-bit groups before the terminal byte
VARINT_TERMINAL_BITS = 8
VARINT_CONTINUE      = 0x80
VARINT_GROUP_MASK    = 0x7F
VARINT_SIGNED_BITS   = VARINT_GROUP_BITS * VARINT_MAX_GROUPS + VARINT_TERMINAL_BITS  # = 29

# Low bit of a key / string descriptor: 1 = inline literal, 0 = table index
DESCRIPTOR_INLINE_FLAG = 0x01

DOUBLE_SIZE = 8


# -----------------------------------------------------------------------------
# TYPE TAGS
# -----------------------------------------------------------------------------
# Booleans have two tags (false / true) and no payload.

TYPE_UNDEFINED  = 0x00
TYPE_NULL       = 0x01
TYPE_BOOL_FALSE = 0x02
TYPE_BOOL_TRUE  = 0x03
TYPE_INT        = 0x04   # payload: one VarInt
TYPE_DOUBLE     = 0x05   # payload: 8-byte IEEE-754, big-endian on disk
TYPE_STRING     = 0x06   # payload: VarInt descriptor (+ UTF-8 bytes if inline)

# Recognised but NOT decoded: payload is skipped (see record_decoder.py)
TYPE_XML          = 0x07
TYPE_DATE         = 0x08
TYPE_ARRAY        = 0x09
TYPE_OBJECT       = 0x0A
TYPE_XML_END      = 0x0B
TYPE_BYTE_ARRAY   = 0x0C
TYPE_VECTOR_INT   = 0x0D
TYPE_VECTOR_UINT  = 0x0E
TYPE_VECTOR_DOUBLE = 0x0F
TYPE_VECTOR_OBJECT = 0x10
TYPE_DICTIONARY   = 0x11

DECODED_TAGS = frozenset(range(TYPE_UNDEFINED, TYPE_STRING + 1))
SKIPPED_TAGS = frozenset(range(TYPE_XML, TYPE_DICTIONARY + 1))
KNOWN_TAGS   = DECODED_TAGS | SKIPPED_TAGS

TAG_NAMES = {
    TYPE_UNDEFINED:     "Undefined",
    TYPE_NULL:          "Null",
    TYPE_BOOL_FALSE:    "BooleanFalse",
    TYPE_BOOL_TRUE:     "BooleanTrue",
    TYPE_INT:           "Integer",
    TYPE_DOUBLE:        "Double",
    TYPE_STRING:        "String",
    TYPE_XML:           "XML",
    TYPE_DATE:          "Date",
    TYPE_ARRAY:         "Array",
    TYPE_OBJECT:        "Object",
    TYPE_XML_END:       "XMLEnd",
    TYPE_BYTE_ARRAY:    "ByteArray",
    TYPE_VECTOR_INT:    "VectorInt",
    TYPE_VECTOR_UINT:   "VectorUInt",
    TYPE_VECTOR_DOUBLE: "VectorDouble",
    TYPE_VECTOR_OBJECT: "VectorObject",
    TYPE_DICTIONARY:    "Dictionary",
}

# Value kinds exposed on SOValue.kind
KIND_UNDEFINED = "undefined"
KIND_NULL      = "null"
KIND_BOOLEAN   = "boolean"
KIND_INTEGER   = "integer"
KIND_DOUBLE    = "double"
KIND_STRING    = "string"
KIND_SKIPPED   = "skipped"

TAG_KINDS = {
    TYPE_UNDEFINED:  KIND_UNDEFINED,
    TYPE_NULL:       KIND_NULL,
    TYPE_BOOL_FALSE: KIND_BOOLEAN,
    TYPE_BOOL_TRUE:  KIND_BOOLEAN,
    TYPE_INT:        KIND_INTEGER,
    TYPE_DOUBLE:     KIND_DOUBLE,
    TYPE_STRING:     KIND_STRING,
}
TAG_KINDS.update({tag: KIND_SKIPPED for tag in SKIPPED_TAGS})


# -----------------------------------------------------------------------------
# STORE LOCATIONS
# -----------------------------------------------------------------------------
# AIR on Android keeps shared objects under:
#   /data/user/0/<app id>/<app id>/Local Store/#SharedObjects/<name>.sol

ANDROID_DATA_ROOT  = "/data/user/0"
LOCAL_STORE_DIR    = "Local Store"
SHARED_OBJECTS_DIR = "#SharedObjects"
SO_EXTENSION       = ".sol"
DEFAULT_SO_NAME    = "saved_data"
