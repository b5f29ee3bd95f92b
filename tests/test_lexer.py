from idcrunch.lexer import IdLexer


SOURCE = ('var _private__foo = _private__bar + _private__foo;\n'
          'x.y = "_private__foo" + $el;\n')


def test_split_keeps_everything():
    chunks = IdLexer.split(SOURCE)
    assert ''.join(chunks) == SOURCE
    assert chunks[1] == 'var'


def test_is_id():
    assert IdLexer.is_id('foo')
    assert IdLexer.is_id('$el')
    assert IdLexer.is_id('_x9')
    assert not IdLexer.is_id('9x')
    assert not IdLexer.is_id(' = ')
    assert not IdLexer.is_id('')


def test_analyze_partitions_chunks():
    lexer = IdLexer()
    lexer.analyze(SOURCE)

    assert dict(lexer.mangle_stats) == {'_private__foo': 3,
                                        '_private__bar': 1}
    assert list(lexer.protected_ids) == ['var', 'x', 'y', '$el']
    assert b'var' in lexer.ambience
    assert b'$el' in lexer.ambience
    assert b'_private__' not in lexer.ambience


def test_freq_sorted_is_stable():
    lexer = IdLexer()
    lexer.analyze('_private__b _private__a _private__c _private__c')
    assert lexer.freq_sorted() == ['_private__c', '_private__b',
                                   '_private__a']


def test_custom_pattern():
    lexer = IdLexer(r'^m_')
    lexer.analyze('m_x + n_x + m_x')
    assert dict(lexer.mangle_stats) == {'m_x': 2}
    assert list(lexer.protected_ids) == ['n_x']


def test_replace():
    lexer = IdLexer()
    lexer.analyze(SOURCE)
    t = lexer.replace({'_private__foo': 'a', '_private__bar': 'b'})
    assert t == 'var a = b + a;\nx.y = "a" + $el;\n'


def test_only_ascii_letters_make_ids():
    # KELVIN SIGN and LONG S fold to k and s under Unicode case folding
    assert not IdLexer.is_id('\u212a')
    assert not IdLexer.is_id('\u017f')
    assert IdLexer.split('x\u212ay') == ['', 'x', '\u212a', 'y', '']
