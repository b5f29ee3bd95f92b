import re

from collections import OrderedDict

from idcrunch.config import CONFIG_get


class IdLexer:
    # Not aware of strings or comments: anything shaped like an
    # identifier is one.
    re_id = re.compile(r'([$_A-Za-z][$_A-Za-z0-9]*)')

    def __init__(self, pattern=None):
        if pattern is None:
            pattern = CONFIG_get('mangle_pattern')
        self.re_mangle = re.compile(pattern)
        self.chunks = []
        # k = name, v = occurrences, in order of appearance
        self.mangle_stats = OrderedDict()
        self.protected_ids = OrderedDict()
        self.ambience = b''

    @staticmethod
    def split(s):
        # Odd indices are identifiers, even ones whatever is in between.
        return IdLexer.re_id.split(s)

    @staticmethod
    def is_id(chunk):
        return IdLexer.re_id.fullmatch(chunk) is not None

    def is_mangle_candidate(self, chunk):
        return self.is_id(chunk) and self.re_mangle.search(chunk) is not None

    def analyze(self, s):
        self.chunks = self.split(s)
        self.mangle_stats = OrderedDict()
        self.protected_ids = OrderedDict()

        ambience = []
        for chunk in self.chunks:
            if not chunk:
                continue

            if self.is_mangle_candidate(chunk):
                if chunk not in self.mangle_stats:
                    self.mangle_stats[chunk] = 0
                self.mangle_stats[chunk] += 1
                continue

            if self.is_id(chunk):
                if chunk not in self.protected_ids:
                    self.protected_ids[chunk] = 0
                self.protected_ids[chunk] += 1

            ambience.append(chunk)

        self.ambience = ''.join(ambience).encode('utf-8')
        return self.chunks

    def freq_sorted(self):
        # Most used first so they get the cheaper ids. Stable for ties.
        return sorted(self.mangle_stats,
                      key=lambda k: self.mangle_stats[k], reverse=True)

    def replace(self, renames):
        return ''.join(renames.get(chunk, chunk) for chunk in self.chunks)
