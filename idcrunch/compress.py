import math
import zlib

from idcrunch.idgen import information_content


# Level and strategy pairs that usually give the smallest streams.
used_zlib_settings = [
    [zlib.Z_BEST_SPEED, zlib.Z_DEFAULT_STRATEGY],
    [6, zlib.Z_DEFAULT_STRATEGY],
    [9, zlib.Z_DEFAULT_STRATEGY],
    [9, zlib.Z_FILTERED],
]


def compress_zlib(uncomp):
    comp = None
    comp_info = ''

    for level, strat in used_zlib_settings:
        compress_obj = zlib.compressobj(level, zlib.DEFLATED,
                                        zlib.MAX_WBITS, 9, strat)
        new_compressed_data = compress_obj.compress(uncomp)
        new_compressed_data += compress_obj.flush()

        # we dont want/need the checksum, so lets remove it
        new_compressed_data = new_compressed_data[:-4]

        if comp is None or len(new_compressed_data) < len(comp):
            comp = new_compressed_data
            comp_info = 'level {}, strat {}'.format(level, strat)

    return comp, comp_info


def byte_stats(data):
    occurrences = [0] * 256
    for c in data:
        occurrences[c] += 1
    return occurrences


def estimated_length(data):
    # Information content rounded up to whole bytes.
    return int(math.ceil(information_content(byte_stats(data)) / 8))
