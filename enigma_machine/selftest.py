import dataclasses
import logging

from enigma_machine import formatting
from enigma_machine import settings

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class KnownVector:
    name: str
    settings: settings.MachineSettings
    plaintext: str
    ciphertext: str


@dataclasses.dataclass
class VectorResult:
    vector: KnownVector
    encoded: str
    decoded: str

    @property
    def encode_ok(self) -> bool:
        return self.encoded == self.vector.ciphertext

    @property
    def decode_ok(self) -> bool:
        return self.decoded == formatting.clean_text(self.vector.plaintext)

    @property
    def passed(self) -> bool:
        return self.encode_ok and self.decode_ok


KNOWN_VECTORS = [
    KnownVector('hello, rotors III II I',
                settings.MachineSettings(rotors=(3, 2, 1), positions='AAA', rings='AAA'),
                'HELLO', 'MFNCZ'),
    KnownVector('hello, basic setting QWE',
                settings.MachineSettings(rotors=(3, 2, 1), positions='QWE', rings='AAA'),
                'HELLO', 'CAAVL'),
    KnownVector('enigma, rotors I II III',
                settings.MachineSettings(rotors=(1, 2, 3), positions='AAA', rings='AAA'),
                'ENIGMA', 'FQGAHW'),
    KnownVector('four keystrokes from ADT',
                settings.MachineSettings(rotors=(3, 2, 1), positions='ADT', rings='AAA'),
                'AAAA', 'OZDM'),
]


def check_vector(vector: KnownVector) -> VectorResult:
    # encoding and decoding each get a freshly configured machine
    plaintext = formatting.clean_text(vector.plaintext)
    encoded = settings.machine_from_settings(vector.settings).encode_message(plaintext)
    decoded = settings.machine_from_settings(vector.settings).encode_message(vector.ciphertext)
    result = VectorResult(vector, encoded, decoded)
    if not result.passed:
        logger.warning('vector %r failed: expected %s, got %s', vector.name, vector.ciphertext, encoded)
    return result


def run_selftest(vectors=None) -> list:
    if vectors is None:
        vectors = KNOWN_VECTORS
    return [check_vector(vector) for vector in vectors]
