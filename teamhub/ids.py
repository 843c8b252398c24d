"""
Identifier generation for hierarchy entities.

Ids are drawn from 64 bits of ``secrets`` randomness and encoded in base36,
zero padded to a fixed width (13 characters by default). For ``n`` ids the
birthday bound puts the chance of any repeat at roughly ``n**2 / 2**65``,
about 2.7e-10 for 100 000 ids. The generator additionally remembers every
id it issued during the process lifetime and redraws on a repeat, so ids are
never reused within a session.
"""
import logging
import secrets
import string

logger = logging.getLogger(__name__)

ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_ID_BITS = 64
DEFAULT_ID_LENGTH = 13  # len(base36(2**64 - 1))
MIN_ID_LENGTH = 11  # 36**11 > 2**56


def encode_base36(number: int, length: int) -> str:
    """Encode a non-negative integer in base36, left padded with zeros to `length`."""
    if number < 0:
        raise ValueError("Only non-negative integers can be encoded")
    chars = []
    while number:
        number, remainder = divmod(number, 36)
        chars.append(ALPHABET[remainder])
    return ''.join(reversed(chars)).rjust(length, '0')


def bits_for_length(length: int) -> int:
    """Largest number of random bits whose base36 encoding fits in `length` characters."""
    bits = 0
    while 2 ** (bits + 1) - 1 < 36 ** length:
        bits += 1
    return bits


class IdGenerator:
    """
    Issues short opaque ids that are unique for the life of the generator.
    """

    def __init__(self, length: int = DEFAULT_ID_LENGTH):
        if length < MIN_ID_LENGTH:
            raise ValueError(f"Id length must be at least {MIN_ID_LENGTH}, got {length}")
        self.length = length
        self.bits = min(DEFAULT_ID_BITS, bits_for_length(length))
        self._issued = set()

    def __call__(self) -> str:
        while True:
            entity_id = encode_base36(secrets.randbits(self.bits), self.length)
            if entity_id not in self._issued:
                self._issued.add(entity_id)
                return entity_id
            logger.warning("Generated id %s was already issued, drawing again.", entity_id)

    def reserve(self, entity_id: str):
        """Record an id that came from elsewhere (a restored snapshot) so it is never handed out."""
        self._issued.add(entity_id)

    @property
    def issued_count(self) -> int:
        return len(self._issued)


_generator = IdGenerator()


def configure(length: int) -> IdGenerator:
    """Replace the process-wide generator with one producing ids of `length` characters."""
    global _generator  # pylint: disable=W0603
    issued = _generator._issued  # pylint: disable=W0212
    _generator = IdGenerator(length)
    _generator._issued = issued  # pylint: disable=W0212
    logger.info("Id generator configured for %d character ids (%d bits).", length, _generator.bits)
    return _generator


def generate_id() -> str:
    """Return a fresh id from the process-wide generator."""
    return _generator()


def reserve_id(entity_id: str):
    """Mark `entity_id` as taken in the process-wide generator."""
    _generator.reserve(entity_id)
