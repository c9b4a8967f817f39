import logging

from .errors import InvalidCharacter

log = logging.getLogger(__name__)

# Five characters (40 bits) fill exactly five bytes, so decoding cycles
# through eight phases. Each row says how the 5-bit value of the current
# character is split:
#
#   (mask, shift)             bits that land in the pending byte
#   emits                     whether the pending byte is now complete
#   (carry_mask, carry_shift) bits that seed the next byte
#
# A positive shift moves left, a negative one moves right.
_PHASES = (
    (0x1F, 3, False, 0x00, 0),  # all 5 bits are the top 5 bits
    (0x1C, -2, True, 0x03, 6),  # top 3 bits finish the byte, lower 2 start the next
    (0x1F, 1, False, 0x00, 0),  # all 5 bits are the middle 5 bits
    (0x10, -4, True, 0x0F, 4),  # top bit finishes the byte, lower 4 start the next
    (0x1E, -1, True, 0x01, 7),  # top 4 bits finish the byte, lowest bit starts the next
    (0x1F, 2, False, 0x00, 0),  # all 5 bits are the middle 5 bits
    (0x18, -3, True, 0x07, 5),  # top 2 bits finish the byte, lower 3 start the next
    (0x1F, 0, True, 0x00, 0),  # all 5 bits are the lowest 5 bits
)


def _shift(value: int, shift: int) -> int:
    return value << shift if shift >= 0 else value >> -shift


def _char_value(ch: str, position: int) -> int:
    if "a" <= ch <= "z":
        return ord(ch) - ord("a")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A")
    if "2" <= ch <= "7":
        return 26 + ord(ch) - ord("2")
    log.debug("rejecting base32 input: bad character at position %d", position)
    raise InvalidCharacter(ch, position)


def decoded_length(length: int) -> int:
    """
    Number of bytes produced by decoding ``length`` base32 characters.
    """
    return (length * 5 + 4) // 8


def decode_base32(text: str) -> bytes:
    """
    Decodes an unpadded base32 string (RFC 4648 alphabet, any case) into raw bytes.

    Unlike :func:`base64.b32decode` this does not require ``=`` padding, so a
    16 character secret decodes straight to 10 bytes. When the input stops
    part way through a byte, the pending bits are emitted as one last byte
    padded with zeros, as long as the output is still shorter than
    :func:`decoded_length`.

    :param text: base32 text, e.g. ``"JBSWY3DPEHPK3PXP"``
    :returns: the decoded bytes
    :raises InvalidCharacter: if ``text`` holds a character outside the alphabet
    """
    num_bytes = decoded_length(len(text))
    result = bytearray()
    which = 0
    working = 0
    for position, ch in enumerate(text):
        val = _char_value(ch, position)
        mask, shift, emits, carry_mask, carry_shift = _PHASES[which]
        working |= _shift(val & mask, shift)
        if emits:
            result.append(working)
            working = _shift(val & carry_mask, carry_shift)
        which = (which + 1) % len(_PHASES)

    if which != 0 and len(result) < num_bytes:
        result.append(working)
    return bytes(result)
