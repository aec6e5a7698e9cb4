import dataclasses
import logging
import string

import numpy as np

logger = logging.getLogger(__name__)

CHARSET = string.ascii_uppercase
N_CHARS = len(CHARSET)

CHAR_TO_NUMBER_MAP = dict()
for _i, _char in enumerate(CHARSET):
    CHAR_TO_NUMBER_MAP[_char] = _i

# numeral: (name, wiring, notch letter)
ROTOR_CATALOG = {
    1: ("I", "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    2: ("II", "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    3: ("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    4: ("IV", "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    5: ("V", "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
}

REFLECTOR_B = "YRUHQSLDPXNGOKMIEBFZCWVJAT"

DEFAULT_ROTORS = (1, 2, 3)


def letter_to_number(letter: str) -> int:
    return CHAR_TO_NUMBER_MAP[letter]


def number_to_letter(number: int) -> str:
    return CHARSET[number % N_CHARS]


def wiring_to_array(wiring: str) -> np.ndarray:
    if sorted(wiring) != list(CHARSET):
        raise ValueError(f'wiring {wiring!r} is not a permutation of the alphabet')
    return np.array([CHAR_TO_NUMBER_MAP[char] for char in wiring])


class ConfigurationError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class SettingResult:
    """
    Outcome of a configuration call on the machine.
    A rejected setting is falsy, so ``if not machine.set_...(...)`` reads naturally.
    """
    applied: bool
    reason: str = ''

    def __bool__(self):
        return self.applied


APPLIED = SettingResult(True)


class Rotor:
    def __init__(self, wiring: str, notch: str, name: str = ''):
        self.name = name
        self.wiring = wiring
        self.notch = letter_to_number(notch)

        self.position = 0
        self.ring_setting = 0

        # inverse permutation: backwards[i] is the position of letter i in the wiring
        self.forwards = wiring_to_array(wiring)
        self.backwards = np.argsort(self.forwards)

    @classmethod
    def from_catalog(cls, numeral: int) -> 'Rotor':
        name, wiring, notch = ROTOR_CATALOG[numeral]
        return cls(wiring, notch, name=name)

    def _adjusted(self, letter: str) -> int:
        return (letter_to_number(letter) + self.position - self.ring_setting) % N_CHARS

    def encode_forward(self, letter: str) -> str:
        wired = int(self.forwards[self._adjusted(letter)])
        return number_to_letter(wired - self.position + self.ring_setting)

    def encode_backward(self, letter: str) -> str:
        wired = int(self.backwards[self._adjusted(letter)])
        return number_to_letter(wired - self.position + self.ring_setting)

    def at_notch(self) -> bool:
        return self.position == self.notch

    def advance(self):
        self.position = (self.position + 1) % N_CHARS

    def set_position(self, letter: str):
        self.position = letter_to_number(letter)

    def set_ring_setting(self, letter: str):
        self.ring_setting = letter_to_number(letter)

    def __repr__(self):
        return f'<Rotor {self.name} pos={number_to_letter(self.position)} ring={number_to_letter(self.ring_setting)}>'


class Reflector:
    def __init__(self, wiring: str = REFLECTOR_B):
        self.wiring = wiring
        table = wiring_to_array(wiring)
        positions = np.arange(N_CHARS)
        if np.any(table == positions) or not np.all(table[table] == positions):
            raise ValueError('reflector wiring must be an involution without fixed points')

    def reflect(self, letter: str) -> str:
        return self.wiring[letter_to_number(letter)]


class Plugboard:
    def __init__(self):
        self.swap_dict = dict()

    def add_connection(self, a: str, b: str):
        # last write wins, old partners are released
        for letter in (a, b):
            partner = self.swap_dict.pop(letter, None)
            if partner is not None:
                self.swap_dict.pop(partner, None)
        if a != b:
            self.swap_dict[a] = b
            self.swap_dict[b] = a

    def remove_connection(self, letter: str):
        partner = self.swap_dict.pop(letter, None)
        if partner is not None:
            del self.swap_dict[partner]

    def clear(self):
        self.swap_dict.clear()

    def encode(self, letter: str) -> str:
        return self.swap_dict.get(letter, letter)

    def pairs(self) -> list:
        return sorted((a, b) for a, b in self.swap_dict.items() if a < b)

    def __repr__(self):
        return '<Plugboard {}>'.format(' '.join(a + b for a, b in self.pairs()))


# the reflector wiring is a process wide constant
REFLECTOR = Reflector(REFLECTOR_B)


class Enigma:
    """
    Enigma I with three rotors out of the five catalog wheels, reflector B and a plugboard.

    The rotors are stored right to left: ``rotors[0]`` is the fast (rightmost) wheel,
    ``rotors[2]`` the leftmost one.

    Configuration calls never raise by default, invalid input leaves the machine untouched
    and the returned :class:`SettingResult` tells why. With ``strict=True`` a rejected
    setting raises :class:`ConfigurationError` instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.reflector = REFLECTOR
        self.plugboard = Plugboard()
        self.rotors = []
        self.rotor_numerals = ()
        self._install(*DEFAULT_ROTORS)

    def _install(self, left: int, middle: int, right: int):
        self.rotors = [Rotor.from_catalog(numeral) for numeral in (right, middle, left)]
        self.rotor_numerals = (left, middle, right)

    def reject(self, reason: str) -> SettingResult:
        if self.strict:
            raise ConfigurationError(reason)
        logger.debug('setting rejected: %s', reason)
        return SettingResult(False, reason)

    def set_rotor_configuration(self, left: int, middle: int, right: int) -> SettingResult:
        for numeral in (left, middle, right):
            # True and 2.0 compare equal to catalog keys
            if not isinstance(numeral, int) or isinstance(numeral, bool) or numeral not in ROTOR_CATALOG:
                return self.reject(f'rotor numeral {numeral!r} not in 1-{len(ROTOR_CATALOG)}')
        self._install(left, middle, right)
        logger.debug('installed rotors %s', ' '.join(rot.name for rot in reversed(self.rotors)))
        return APPLIED

    def _apply_letters(self, text: str, setter_name: str) -> SettingResult:
        text = text.upper()
        n_applied = min(len(text), len(self.rotors))
        if self.strict and len(text) > len(self.rotors):
            return self.reject(f'{text!r} has more than {len(self.rotors)} letters')
        # the last character belongs to the rightmost rotor
        letters = [text[len(text) - 1 - i] for i in range(n_applied)]
        for letter in letters:
            if letter not in CHAR_TO_NUMBER_MAP:
                return self.reject(f'{letter!r} in {text!r} is not a letter A-Z')
        for rot, letter in zip(self.rotors, letters):
            getattr(rot, setter_name)(letter)
        logger.debug('%s from %r', setter_name, text)
        if len(text) > n_applied:
            return SettingResult(True, f'only the last {n_applied} letters of {text!r} were used')
        return APPLIED

    def set_rotor_positions(self, text: str) -> SettingResult:
        return self._apply_letters(text, 'set_position')

    def set_ring_settings(self, text: str) -> SettingResult:
        return self._apply_letters(text, 'set_ring_setting')

    def add_plugboard_connection(self, a: str, b: str) -> SettingResult:
        a, b = a.upper(), b.upper()
        for letter in (a, b):
            if letter not in CHAR_TO_NUMBER_MAP:
                return self.reject(f'plug {letter!r} is not a letter A-Z')
        if self.strict and a == b:
            return self.reject(f'cannot plug {a!r} to itself')
        self.plugboard.add_connection(a, b)
        logger.debug('plugged %s%s', a, b)
        return APPLIED

    def get_rotor_positions(self) -> str:
        return ''.join(number_to_letter(rot.position) for rot in reversed(self.rotors))

    def get_ring_settings(self) -> str:
        return ''.join(number_to_letter(rot.ring_setting) for rot in reversed(self.rotors))

    def advance_rotors(self):
        right, middle, left = self.rotors
        # notches are checked before anything moves
        if middle.at_notch():
            middle.advance()
            left.advance()
        elif right.at_notch():
            middle.advance()
        right.advance()

    def encode_character(self, char: str) -> str:
        letter = char.upper()
        if letter not in CHAR_TO_NUMBER_MAP:
            return char

        self.advance_rotors()

        letter = self.plugboard.encode(letter)
        for rot in self.rotors:
            letter = rot.encode_forward(letter)
        letter = self.reflector.reflect(letter)
        for rot in reversed(self.rotors):
            letter = rot.encode_backward(letter)
        return self.plugboard.encode(letter)

    def encode_message(self, input_: str) -> str:
        output = str()
        for char in input_:
            output += self.encode_character(char)
        return output
