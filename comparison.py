#! Our decoder is pure Python and yields one pixel at a time, while the qoi package is a C extension,
#! so the numbers only show the order of magnitude of the gap.
#! Requires the qoi package: pip install -e ".[bench]"

import argparse
import time

import numpy as np

import qoi as OfficialQOI
from tinyqoi import load_qoi, to_array

DEFAULT_REPEAT = 3


def time_compare(qoi_path: str, repeat: int = DEFAULT_REPEAT):
    with open(qoi_path, "rb") as f:
        content = f.read()

    # Decode in pure Python (our implementation)
    start_time = time.time()
    for _ in range(repeat):
        ours = to_array(load_qoi(qoi_path))
    end_time = time.time()
    print(f"tinyqoi decoded {qoi_path} in {(end_time - start_time) / repeat:.3f} seconds")

    # Decode in C using the qoi package
    start_time = time.time()
    for _ in range(repeat):
        official = OfficialQOI.decode(content)
    end_time = time.time()
    print(f"qoi decoded {qoi_path} in {(end_time - start_time) / repeat:.3f} seconds")

    # The qoi package keeps the alpha channel for 4-channel files
    assert np.array_equal(ours, official[..., :3]), "Decoded data mismatch!"


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Time tinyqoi against the qoi package.")
    parser.add_argument("qoi_file")
    parser.add_argument("--repeat", type=int, default=DEFAULT_REPEAT)
    args = parser.parse_args()

    time_compare(args.qoi_file, args.repeat)
