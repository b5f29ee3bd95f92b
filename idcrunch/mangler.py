import errno
import os
import sys

from collections import OrderedDict

from idcrunch.common import log, log_deeper, log_error, \
    set_log_info, byte_length, bit_length
from idcrunch.compress import compress_zlib, byte_stats, estimated_length
from idcrunch.config import CONFIG_get
from idcrunch.idgen import BlacklistApprover, IdGenerator, IdGenError, \
    information_content
from idcrunch.lexer import IdLexer


class Mangler:
    def __init__(self, pattern=None, reserved=(), use_ambience=True,
                 id_bytes=None):
        self.lexer = IdLexer(pattern)
        self.reserved = list(reserved)
        self.use_ambience = use_ambience
        self.id_bytes = id_bytes
        # k = original name, v = (occurrences, new name)
        self.renames = OrderedDict()
        self.idgen = None

    def create_idgen(self):
        lexer = self.lexer

        # Anything already in the text must not be handed out again.
        approver = BlacklistApprover(self.reserved)
        for name in lexer.protected_ids:
            approver.add(name)

        idgen = IdGenerator(approver, self.id_bytes)
        if self.use_ambience:
            idgen.append_ambience(lexer.ambience)

        # Stats and blacklist are done, now it can be initialized.
        idgen.init()

        log_deeper("Blacklisted names: {}, id candidates: {}".format(
            len(approver), len(idgen.candidates())))

        return idgen

    def mangle(self, data):
        s = data.decode('utf-8')
        lexer = self.lexer
        lexer.analyze(s)

        pr = ', '.join("{}: {}x".format(k, v)
                       for k, v in lexer.mangle_stats.items())
        log_deeper("Mangle candidate freq ({}): {}".format(
            len(lexer.mangle_stats), pr))

        self.idgen = idgen = self.create_idgen()
        self.renames = OrderedDict()

        for name in lexer.freq_sorted():
            occurrences = lexer.mangle_stats[name]
            new_id = idgen.generate(occurrences).decode('utf-8')
            self.renames[name] = (occurrences, new_id)
            log("[{}] {} -> {}".format(occurrences, name, new_id),
                sys.stderr)

        t = lexer.replace({k: v[1] for k, v in self.renames.items()})
        return t.encode('utf-8')


def read_reserved(filename):
    with open(filename, 'r', encoding='utf-8') as file:
        names = []
        for line in file:
            line = line.split('#', 1)[0].strip()
            if line:
                names.extend(line.split())
        return names


class CrunchStage:
    def __init__(self, name, data):
        self.name = name
        self.length = len(data)
        comp, self.comp_info = compress_zlib(data)
        self.comp_length = len(comp)
        self.bits = information_content(byte_stats(data))
        self.estimated_length = estimated_length(data)


def crunch(args):
    try:
        print("Crunching {} => {}".format(os.path.basename(args.filename_in),
              os.path.basename(args.filename_out)))
        file = open(args.filename_in, mode='rb')
    except EnvironmentError as e:
        if e.errno != errno.ENOENT:
            raise
        log_error("No such file: '{}'".format(args.filename_in))
        return None

    with file:
        data = file.read()

    log_level = args.verbose
    set_log_info(log_level, args.pedantic)

    reserved = []
    for filename in args.reserved or []:
        try:
            reserved += read_reserved(filename)
        except EnvironmentError as e:
            if e.errno != errno.ENOENT:
                raise
            log_error("No such file: '{}'".format(filename))
            return None

    mangler = Mangler(pattern=args.pattern, reserved=reserved,
                      use_ambience=not args.no_ambience)

    try:
        mangled = mangler.mangle(data)
    except IdGenError as e:
        log_error("Can't allocate identifiers: {}".format(e))
        return None
    except UnicodeDecodeError:
        log_error("'{}' is not UTF-8 encoded".format(args.filename_in))
        return None

    stages = []

    def compress_info(stage):
        s = "{} ({}):".format(stage.name, byte_length(stage.length))
        s += " " * max(1, 26 - len(s))
        s += byte_length(stage.comp_length)

        original_length = stages[0].comp_length
        if stage.comp_length != original_length and original_length:
            ratio = 100.0 * (original_length
                             - stage.comp_length) / original_length
            s += " ({:2.2f}%)".format(ratio)

        extra = " zlib {}, estimated {} ({})".format(
            stage.comp_info, byte_length(stage.estimated_length),
            bit_length(stage.bits))
        log(s, min_log_level=0, extra=extra)

    def add_stage(name, data):
        stage = CrunchStage(name, data)
        stages.append(stage)
        compress_info(stage)

    add_stage("Original", data)
    add_stage("Mangled", mangled)

    log("Renamed {} identifier{}".format(
        len(mangler.renames), "" if len(mangler.renames) == 1 else "s"))

    with open(args.filename_out, 'wb') as file:
        file.write(mangled)

    return mangler


def default_output(filename_in):
    base, ext = os.path.splitext(filename_in)
    return base + CONFIG_get('output_suffix', '.min') + ext
