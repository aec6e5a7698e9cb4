from enigma_machine.enigma import ConfigurationError, Enigma, Plugboard, Reflector, Rotor, SettingResult
from enigma_machine.settings import MachineSettings, configure, machine_from_settings
