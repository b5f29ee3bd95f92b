import sys

log_level = 0
log_pedantic = False


def set_log_info(level, pedantic):
    global log_level, log_pedantic
    log_level = level
    log_pedantic = pedantic


def byte_length(byte_count):
    if log_pedantic:
        return "{0} byte{1}".format(byte_count, "" if byte_count == 1 else "s")
    else:
        return str(byte_count) + "b"


def bit_length(bit_count):
    if log_pedantic:
        return "{0:.2f} bits".format(bit_count)
    else:
        return "{0:.1f}bit".format(bit_count)


def log(s="", file=None, min_log_level=1, extra="", end="\n"):
    # Resolved per call so redirected streams are honoured.
    if file is None:
        file = sys.stdout
    if log_level >= min_log_level or file is not sys.stdout:
        print(s + (extra if log_level >= 2 else ''), file=file, end=end)


def log_deep(s):
    return log(s, min_log_level=2)


def log_deeper(s):
    return log(s, min_log_level=3)


def log_deepest(s):
    return log(s, min_log_level=4)


def log_error(s, min_log_level=0):
    log("Error: " + s, sys.stderr, min_log_level)
