import argparse
import dataclasses
import logging
import sys

from enigma_machine import enigma
from enigma_machine import formatting
from enigma_machine import selftest
from enigma_machine import settings
from enigma_machine import time_enigma

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog='enigma-i', description='Enigma I simulator with reflector B')
    p.add_argument('-v', '--verbose', action='store_true', help='log configuration details')
    sub = p.add_subparsers(dest='command', required=True)

    enc = sub.add_parser('encode', help='encrypt or decrypt a message (the machine is reciprocal)')
    enc.add_argument('text', nargs='?', help='message text, read from stdin if omitted')
    enc.add_argument('--preset', help='start from a named key sheet, see "presets"')
    enc.add_argument('--config', metavar='FILE', help='load settings from a JSON file')
    enc.add_argument('--rotors', help='wheel order left to right, e.g. "3 2 1" or "III II I"')
    enc.add_argument('--positions', help='basic setting, e.g. "ADT"')
    enc.add_argument('--rings', help='ring settings, e.g. "AAA"')
    enc.add_argument('--plugboard', help='pairs like "AB CD EF"')
    enc.add_argument('--strict', action='store_true', help='refuse invalid settings instead of ignoring them')
    enc.add_argument('--raw', action='store_true', help='do not group the output in blocks of five')

    sub.add_parser('selftest', help='check the machine against known messages')

    bench = sub.add_parser('bench', help='time message encoding')
    bench.add_argument('--messages', type=int, default=1000)
    bench.add_argument('--length', type=int, default=256)
    bench.add_argument('--seed', type=int, default=41)

    sub.add_parser('presets', help='list the available key sheets')
    return p.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> settings.MachineSettings:
    if args.config:
        machine_settings = settings.load_settings(args.config)
    elif args.preset:
        machine_settings = settings.get_preset(args.preset)
    else:
        machine_settings = settings.MachineSettings()

    overrides = dict()
    if args.rotors is not None:
        overrides['rotors'] = settings.parse_rotor_numerals(args.rotors)
    if args.positions is not None:
        overrides['positions'] = args.positions
    if args.rings is not None:
        overrides['rings'] = args.rings
    if args.plugboard is not None:
        overrides['plugboard'] = args.plugboard
    return dataclasses.replace(machine_settings, **overrides)


def run_encode(args: argparse.Namespace) -> int:
    try:
        machine_settings = settings_from_args(args)
        machine = settings.machine_from_settings(machine_settings, strict=args.strict)
    except (ValueError, OSError) as e:
        print(f'invalid settings: {e}', file=sys.stderr)
        return 2

    text = args.text if args.text is not None else sys.stdin.read()
    output = machine.encode_message(formatting.clean_text(text))
    print(output if args.raw else formatting.group_blocks(output))
    return 0


def run_selftest() -> int:
    results = selftest.run_selftest()
    for result in results:
        status = 'ok' if result.passed else 'FAILED'
        print(f'{result.vector.name}: {result.vector.plaintext} -> {result.encoded} {status}')
    n_failed = sum(not result.passed for result in results)
    print(f'{len(results) - n_failed}/{len(results)} vectors passed')
    return 1 if n_failed else 0


def run_bench(args: argparse.Namespace) -> int:
    avg_time = time_enigma.time_encoding(n_messages=args.messages, chars_per_message=args.length, seed=args.seed)
    print(f'Average encoding time for message with {args.length} characters: {avg_time:.2e} seconds')
    return 0


def run_presets() -> int:
    for name, preset in sorted(settings.PRESETS.items()):
        wheels = ' '.join(enigma.ROTOR_CATALOG[numeral][0] for numeral in preset.rotors)
        print(f'{name}: rotors {wheels}, rings {preset.rings}, start {preset.positions}, '
              f'plugs {preset.plugboard or "-"}')
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    if args.command == 'encode':
        return run_encode(args)
    if args.command == 'selftest':
        return run_selftest()
    if args.command == 'bench':
        return run_bench(args)
    return run_presets()


if __name__ == '__main__':
    sys.exit(main())
