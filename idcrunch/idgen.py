import math

from enum import Enum

from idcrunch.config import CONFIG_get


class ApprovalStatus(Enum):
    OK = 0        # Usable as-is
    SKIP = 1      # This exact id can't be used, longer ones might
    SKIP_TREE = 2  # Neither this id nor anything starting with it


class IdGenError(Exception):
    pass


class NotInitializedError(IdGenError):
    pass


class InvariantViolationError(IdGenError):
    pass


class ExhaustedNamespaceError(IdGenError):
    pass


DIGITS = b'0123456789'
UNDERSCORE = ord('_')


def default_approve(id):
    # Starts with a digit: no extension fixes that.
    if len(id) >= 1 and id[0] in DIGITS:
        return ApprovalStatus.SKIP_TREE

    # Leading double underscore is reserved by convention.
    if len(id) >= 2 and id[0] == UNDERSCORE and id[1] == UNDERSCORE:
        return ApprovalStatus.SKIP_TREE

    return ApprovalStatus.OK


class BlacklistApprover:
    """Rejects exact names, leaving their extensions to the base policy.

    Names are kept as bytes since that's what the generator hands out;
    str names are UTF-8 encoded on the way in.
    """

    def __init__(self, names=(), base=default_approve):
        self.base = base
        self.dont_mangle = set()
        for name in names:
            self.add(name)

    def add(self, name):
        if isinstance(name, str):
            name = name.encode('utf-8')
        self.dont_mangle.add(bytes(name))

    def __contains__(self, name):
        if isinstance(name, str):
            name = name.encode('utf-8')
        return bytes(name) in self.dont_mangle

    def __len__(self):
        return len(self.dont_mangle)

    def __call__(self, id):
        if id in self.dont_mangle:
            return ApprovalStatus.SKIP
        return self.base(id)


def information_content(occurrences):
    """Estimated compressed size in bits of a byte occurrence table.

    Shannon entropy is -sum(p * log2(p)) with p = occurrence / total.
    Multiplied by total and rearranged this needs no division per byte:
    total * log2(total) - sum(occurrence * log2(occurrence)).
    """
    partials = 0.0
    total = 0

    for occurrence in occurrences:
        if occurrence > 0:
            partials += occurrence * math.log2(occurrence)
            total += occurrence

    if not total:
        return 0

    return total * math.log2(total) - partials


class IdGenerator:
    """Hands out identifiers that keep the surrounding text compressible.

    Candidates are the leaves of a tree of ids over id_bytes. Every call to
    generate() picks the leaf that adds the least information content to
    the ambient byte statistics and replaces it with its children. No id is
    returned twice, but a returned id may be the prefix of a later one
    ("$", then "$$"). The live candidates never prefix each other.

    Usage: append_ambience() for the text the ids end up in, init(), then
    generate() once per name, most frequently used names first.
    """

    def __init__(self, approve=None, id_bytes=None):
        self.approve = approve if approve is not None else default_approve
        if id_bytes is None:
            id_bytes = CONFIG_get('id_bytes')
        self.id_bytes = bytes(id_bytes)
        if len(set(self.id_bytes)) != len(self.id_bytes):
            raise ValueError("Duplicate id bytes in {!r}".format(
                self.id_bytes))

        # The id candidates, in tie-break order
        self.state = None
        # k = byte value, v = occurrences in the ambient context
        self.ambience_stats = [0] * 256

    @property
    def inited(self):
        return self.state is not None

    def candidates(self):
        if self.state is None:
            raise NotInitializedError("init() must be called first")
        return list(self.state)

    def reset_ambience(self):
        self.ambience_stats = [0] * 256

    def append_ambience(self, chunk, count=1):
        # E.g. for `local <id> = "abracadabra"` it's useful to know
        # there are five a's around.
        if isinstance(chunk, str):
            chunk = chunk.encode('utf-8')
        for c in chunk:
            self.ambience_stats[c] += count

    def expand_state(self, leaf, state):
        # Only the leaves of the tree are of interest, so a flat list is
        # used. "a" is replaced with "a$", "a0", ... "az" minus whatever
        # isn't approved.
        try:
            index = state.index(leaf)
        except ValueError:
            raise InvariantViolationError(
                "Leaf {!r} is not part of the state".format(leaf))

        replacement = []
        for c in self.id_bytes:
            new_leaf = leaf + bytes((c,))

            status = self.approve(new_leaf)
            if status == ApprovalStatus.SKIP_TREE:
                continue

            replacement.append(new_leaf)
            if status == ApprovalStatus.SKIP:
                # Only its children can be used.
                self.expand_state(new_leaf, replacement)

        state[index:index + 1] = replacement

    def init(self):
        # Bootstrap from the empty id, which is never a candidate itself.
        self.state = [b'']
        self.expand_state(self.state[0], self.state)

    def ambience_info(self):
        # (total, sum of occurrence * log2(occurrence))
        stats = self.ambience_stats
        total = sum(stats)
        partials = math.fsum(o * math.log2(o) for o in stats if o > 0)
        return total, partials

    def score(self, candidate, count=1, base=None):
        """Information content of the ambience extended with count times
        the candidate.

        Equals information_content() of the projected table up to rounding,
        but only the candidate's bytes are recomputed.
        """
        stats = self.ambience_stats
        total, partials = base if base is not None else self.ambience_info()

        projected = {}
        for c in candidate:
            projected[c] = projected.get(c, stats[c]) + count

        terms = [partials]
        for c, occurrence in projected.items():
            if stats[c]:
                terms.append(-stats[c] * math.log2(stats[c]))
            terms.append(occurrence * math.log2(occurrence))

        total += len(candidate) * count
        if not total:
            return 0

        return total * math.log2(total) - math.fsum(terms)

    def generate(self, count=1):
        """Pick, commit and return the best id candidate.

        count is how many times the id will be used in the output.
        """
        if self.state is None:
            raise NotInitializedError("init() must be called first")

        if count < 1:
            raise ValueError("count must be positive, got {}".format(count))

        if not self.state:
            raise ExhaustedNamespaceError(
                "No identifiers left with {} id bytes".format(
                    len(self.id_bytes)))

        best_score = math.inf
        best = None
        base = self.ambience_info()

        # Ties keep the earliest candidate.
        for candidate in self.state:
            score = self.score(candidate, count, base)
            if score < best_score:
                best_score = score
                best = candidate

        self.append_ambience(best, count)
        self.expand_state(best, self.state)

        return best
