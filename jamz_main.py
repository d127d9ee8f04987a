# -------------------------------------------------------------------------
# jamz_main.py: JAMZ front end (lexer -> parser -> semantic analysis)
# Run with a source file: python jamz_main.py program.c [--keywords table.json]
# -------------------------------------------------------------------------
import argparse
import logging
import pprint
import sys

import jamz_ast
import jamz_keywords as keywords
from jamz_diagnostics import Diagnostics
from jamz_indexer import SourceIndexer
from jamz_lexer import tokenize
from jamz_parser import parse
from jamz_semantic import SemanticAnalyzer

log = logging.getLogger('jamz')


class FrontendResult:
    def __init__(self, tokens, ast, diagnostics, symbols):
        self.tokens = tokens
        self.ast = ast
        self.diagnostics = diagnostics
        self.symbols = symbols

    @property
    def ok(self):
        return not self.diagnostics.has_errors


# runs the three stages in order; each stage only runs if the one before it succeeded
def run_frontend(source, keyword_table, diagnostics=None):
    if diagnostics is None:
        diagnostics = Diagnostics()

    tokens = tokenize(source, diagnostics)
    if tokens.has_error:
        log.info('lexical analysis failed, not parsing')
        return FrontendResult(tokens, None, diagnostics, None)

    program = parse(tokens, diagnostics)
    if program is None:
        log.info('parsing failed, not analyzing')
        return FrontendResult(tokens, None, diagnostics, None)

    analyzer = SemanticAnalyzer(keyword_table, diagnostics)
    analyzer.analyze(program)
    return FrontendResult(tokens, program, diagnostics, analyzer.symbols)


def build_arg_parser():
    parser = argparse.ArgumentParser(prog='jamz', description='Check a JAMZ source file: tokens, syntax and declarations.')
    parser.add_argument('source', help='source file to check')
    parser.add_argument('-k', '--keywords', help='keyword table (JSON); defaults to $%s or data/keywords.json' % keywords.ENV_VAR)
    parser.add_argument('--tokens', action='store_true', help='print the token list')
    parser.add_argument('--ast', action='store_true', help='print the syntax tree')
    parser.add_argument('--symbols', action='store_true', help='print the symbol table')
    parser.add_argument('-d', '--debug', action='store_true', help='log every stage to stderr')
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format='[%(name)s] %(message)s')

    try:
        keyword_table = keywords.load_keywords(args.keywords)
    except keywords.KeywordTableError as err:
        print('[JAMZ]: %s' % err, file=sys.stderr)
        return 2

    try:
        with open(args.source, encoding='utf-8', errors='replace') as source:
            code = source.read()
    except OSError as err:
        print('[JAMZ]: cannot read %s: %s' % (args.source, err.strerror or err), file=sys.stderr)
        return 2

    result = run_frontend(code, keyword_table)
    printer = pprint.PrettyPrinter(compact=True)

    if args.tokens:
        print('\nTokens')
        print('------')
        for tok in result.tokens:
            print('%-10s %-12r line %d, col %d' % (tok.kind.name, tok.lexeme, tok.line, tok.column))

    if args.ast and result.ast is not None:
        print('\nSyntax Tree')
        print('-----------')
        print(jamz_ast.dump(result.ast))

    if args.symbols and result.symbols is not None:
        print('\nSymbol Table')
        print('------------')
        printer.pprint(result.symbols)

    if result.diagnostics.has_errors:
        print('There were %d errors encountered.' % (len(result.diagnostics) + result.diagnostics.dropped), file=sys.stderr)
        print(result.diagnostics.format(SourceIndexer(code)), file=sys.stderr)
        return 1

    print('Front end completed successfully! No errors')
    return 0


if __name__ == '__main__':
    sys.exit(main())
