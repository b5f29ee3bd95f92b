import zlib

from idcrunch.compress import byte_stats, compress_zlib, estimated_length


def test_compress_zlib_strips_checksum():
    data = b'abracadabra ' * 100
    comp, info = compress_zlib(data)

    assert len(comp) < len(data)
    assert info.startswith('level ')
    assert zlib.decompressobj().decompress(comp) == data


def test_byte_stats():
    stats = byte_stats(b'abba')
    assert len(stats) == 256
    assert stats[ord('a')] == 2
    assert stats[ord('b')] == 2
    assert sum(stats) == 4


def test_estimated_length():
    assert estimated_length(b'') == 0
    assert estimated_length(b'aaaa') == 0
    # 2 bits
    assert estimated_length(b'ab') == 1
    # 4 symbols * 2 bits * 4
    assert estimated_length(b'abcd' * 4) == 4
