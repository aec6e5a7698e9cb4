import dataclasses
import json
import logging
import pathlib

from enigma_machine import enigma

logger = logging.getLogger(__name__)

ROMAN_NUMERALS = {name: numeral for numeral, (name, _, _) in enigma.ROTOR_CATALOG.items()}


@dataclasses.dataclass
class MachineSettings:
    """
    A key sheet entry. `rotors` is left to right (Walzenlage),
    `positions` and `rings` are read right to left by the machine.
    """
    rotors: tuple = enigma.DEFAULT_ROTORS
    positions: str = 'AAA'
    rings: str = 'AAA'
    plugboard: str = ''

    def __post_init__(self):
        self.rotors = tuple(self.rotors)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'MachineSettings':
        if not isinstance(data, dict):
            raise ValueError(f'settings must be a mapping, got {type(data).__name__}')
        rotors = data.get('rotors', enigma.DEFAULT_ROTORS)
        if isinstance(rotors, str):
            rotors = parse_rotor_numerals(rotors)
        elif isinstance(rotors, (list, tuple)):
            rotors = tuple(_parse_numeral(str(token)) for token in rotors)
        else:
            raise ValueError(f'rotors must be a string or a list of numerals, got {rotors!r}')

        fields = dict()
        for name, default in (('positions', 'AAA'), ('rings', 'AAA'), ('plugboard', '')):
            value = data.get(name, default)
            if not isinstance(value, str):
                raise ValueError(f'{name} must be a string, got {value!r}')
            fields[name] = value
        return cls(rotors=rotors, **fields)


PRESETS = {
    # plain machine as delivered, handy for checking against other simulators
    'factory': MachineSettings(rotors=(1, 2, 3), positions='AAA', rings='AAA', plugboard=''),
    # key of the Operation Barbarossa messages, 7 July 1941, basic setting BLA
    'barbarossa-1941': MachineSettings(rotors=(2, 4, 5), positions='BLA', rings='BUL',
                                       plugboard='AV BS CG DL FU HZ IN KM OW RX'),
}


def _parse_numeral(token: str) -> int:
    token = token.upper()
    if token in ROMAN_NUMERALS:
        return ROMAN_NUMERALS[token]
    try:
        return int(token)
    except ValueError:
        return 0


def parse_rotor_numerals(text: str) -> tuple:
    """
    '3 2 1', '3,2,1', '321' and 'III II I' all give (3, 2, 1).
    Tokens that are no numeral become 0, which the machine rejects.
    """
    tokens = text.replace(',', ' ').split()
    if len(tokens) == 1 and tokens[0].isdigit():
        tokens = list(tokens[0])
    return tuple(_parse_numeral(token) for token in tokens)


def parse_plugboard(text: str) -> list:
    pairs = []
    for token in text.upper().split():
        if len(token) != 2:
            logger.debug('skipping plugboard token %r', token)
            continue
        pairs.append((token[0], token[1]))
    return pairs


def configure(machine: enigma.Enigma, settings: MachineSettings) -> list:
    """
    Apply the settings in the order an operator would: wheel order, ring settings,
    basic setting, plugs. Ring settings go before the positions so the positions
    end up as the visible letters.
    """
    results = []
    if len(settings.rotors) == 3:
        results.append(machine.set_rotor_configuration(*settings.rotors))
    else:
        results.append(machine.reject(f'need 3 rotor numerals, got {settings.rotors!r}'))
    results.append(machine.set_ring_settings(settings.rings))
    results.append(machine.set_rotor_positions(settings.positions))
    machine.plugboard.clear()
    for a, b in parse_plugboard(settings.plugboard):
        results.append(machine.add_plugboard_connection(a, b))
    return results


def machine_from_settings(settings: MachineSettings, strict: bool = False) -> enigma.Enigma:
    machine = enigma.Enigma(strict=strict)
    configure(machine, settings)
    return machine


def get_preset(name: str) -> MachineSettings:
    try:
        return dataclasses.replace(PRESETS[name.lower()])
    except KeyError:
        raise ValueError(f'unknown preset {name!r}, choose one of {sorted(PRESETS)}')


def load_settings(path) -> MachineSettings:
    with open(path, 'r') as read_file:
        data = json.load(read_file)
    logger.debug('loaded settings from %s', path)
    return MachineSettings.from_dict(data)


def save_settings(settings: MachineSettings, path):
    data = settings.to_dict()
    data['rotors'] = list(data['rotors'])
    pathlib.Path(path).write_text(json.dumps(data, indent=2))
