import pytest

from jamz_diagnostics import Diagnostics, Stage
from jamz_keywords import parse_keywords
from jamz_lexer import tokenize
from jamz_parser import parse
from jamz_semantic import SemanticAnalyzer

KEYWORD_RECORDS = [
    {'name': 'int', 'type': 'int', 'category': 'type'},
    {'name': 'float', 'type': 'float', 'category': 'type'},
    {'name': 'string', 'type': 'string', 'category': 'type'},
    {'name': 'return', 'type': 'none', 'category': 'control'},
    {'name': 'while', 'type': 'none', 'category': 'control'},
    {'name': 'print', 'type': 'none', 'category': 'function'},
]


@pytest.fixture
def keywords():
    return parse_keywords(KEYWORD_RECORDS)


@pytest.fixture
def parse_source():
    def run(source):
        diagnostics = Diagnostics()
        tokens = tokenize(source, diagnostics)
        assert not tokens.has_error, tokens.errors
        return parse(tokens, diagnostics), diagnostics
    return run


@pytest.fixture
def check(keywords, parse_source):
    '''Run the whole front end and return the semantic messages.'''
    def run(source):
        program, diagnostics = parse_source(source)
        assert program is not None, diagnostics.messages()
        SemanticAnalyzer(keywords, diagnostics).analyze(program)
        return [diag.message for diag in diagnostics.of_stage(Stage.SEMANTIC)]
    return run
