import zigpy.types as t

# IMPORTANT
# The plugin carries attribute values as big-endian hex strings (human readable), while the
# ZCL payload on air is little-endian. decode_endian_data() makes the swap for fixed length
# data types, variable length data types (strings, arrays) are already in air order.

FIXED_LENGTH_TYPES = {
    1: t.uint8_t,
    2: t.uint16_t,
    3: t.uint24_t,
    4: t.uint32_t,
    5: t.uint40_t,
    6: t.uint48_t,
    7: t.uint56_t,
    8: t.uint64_t,
}


def data_type_length(datatype):
    """ Return the number of bytes of a fixed length ZCL data type, or None for variable length ones """

    data_type_id = int(datatype, 16)

    if data_type_id in {0x08, 0x10, 0x18, 0x20, 0x28, 0x30}:
        return 1
    if data_type_id in {0x09, 0x19, 0x21, 0x29, 0x31, 0x38}:
        return 2
    if data_type_id in {0x0A, 0x1A, 0x22, 0x2A}:
        return 3
    if data_type_id in {0x0B, 0x1B, 0x23, 0x2B, 0x39, 0xE0, 0xE1, 0xE2}:
        return 4
    if data_type_id in {0x0C, 0x1C, 0x24, 0x2C}:
        return 5
    if data_type_id in {0x0D, 0x1D, 0x25, 0x2D}:
        return 6
    if data_type_id in {0x0E, 0x1E, 0x26, 0x2E}:
        return 7
    if data_type_id in {0x0F, 0x1F, 0x27, 0x2F, 0x3A, 0xF0}:
        return 8
    return None


def decode_endian_data(data, datatype):
    # https://zigbeealliance.org/wp-content/uploads/2019/12/07-5123-06-zigbee-cluster-library-specification.pdf Table 2-10 (page 2-41)

    if int(datatype, 16) == 0x00:
        return ""

    length = data_type_length(datatype)
    if length is None:
        return data

    # Remove any stuffing ahead of the expected length
    data = data[-2 * length:]
    return FIXED_LENGTH_TYPES[length](int(data, 16)).serialize().hex()

