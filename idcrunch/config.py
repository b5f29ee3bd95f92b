class CONFIG:
    # Identifiers matching this are renamed, everything else is kept as-is.
    # Overridable by --pattern
    mangle_pattern = r'^_private__'

    # Bytes new identifiers are built from, in tie-break order.
    # $ 0-9 A-Z _ a-z
    id_bytes = (b'$0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_'
                b'abcdefghijklmnopqrstuvwxyz')

    # Appended to the input name when no explicit output is given.
    output_suffix = '.min'


def CONFIG_get(s, default=None):
    if s in CONFIG.__dict__:
        return CONFIG.__dict__[s]
    return default
