import time
import random
import tqdm

from enigma_machine import enigma
from enigma_machine import settings


def time_encoding(machine_settings: settings.MachineSettings = None, n_messages: int = 3000,
                  chars_per_message: int = 256, seed: int = 41, disable_tqdm: bool = False) -> float:
    """
    Average wall clock seconds to encode one random message of `chars_per_message` letters.
    Every message starts from the same basic setting.
    """
    if machine_settings is None:
        machine_settings = settings.get_preset('barbarossa-1941')
    encoder = settings.machine_from_settings(machine_settings)

    rng = random.Random(seed)
    messages = [''.join(rng.choices(enigma.CHARSET, k=chars_per_message)) for _ in range(n_messages)]

    tick = time.perf_counter()
    for message in tqdm.tqdm(messages, disable=disable_tqdm):
        encoder.set_rotor_positions(machine_settings.positions)
        encoder.encode_message(message)
    tock = time.perf_counter()

    return (tock - tick) / n_messages


if __name__ == '__main__':
    chars_per_message = 256
    avg_time = time_encoding(chars_per_message=chars_per_message)
    print(f'Average encoding time for message with {chars_per_message} characters: {avg_time:.2e} seconds')
