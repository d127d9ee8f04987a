import pytest

from jamz_diagnostics import Diagnostics, Stage
from jamz_lexer import TokenKind as K, tokenize


def positions(result):
    return [(tok.kind, tok.lexeme, tok.line, tok.column) for tok in result]


def test_minimal_program_tokens():
    result = tokenize('int main(){ int x = 5; return x; }')

    assert not result.has_error
    assert positions(result) == [
        (K.INT, 'int', 1, 1),
        (K.MAIN, 'main', 1, 5),
        (K.LPAREN, '(', 1, 9),
        (K.RPAREN, ')', 1, 10),
        (K.LBRACE, '{', 1, 11),
        (K.INT, 'int', 1, 13),
        (K.IDENTIFIER, 'x', 1, 17),
        (K.OPERATOR, '=', 1, 19),
        (K.NUMBER, '5', 1, 21),
        (K.SEMICOLON, ';', 1, 22),
        (K.RETURN, 'return', 1, 24),
        (K.IDENTIFIER, 'x', 1, 31),
        (K.SEMICOLON, ';', 1, 32),
        (K.RBRACE, '}', 1, 34),
        (K.EOF, '', 1, 35),
    ]


def test_empty_source_is_just_eof():
    result = tokenize('')
    assert positions(result) == [(K.EOF, '', 1, 1)]
    assert result.errors == []


def test_newlines_reset_columns():
    result = tokenize('int\n  x\n\n\ty')
    assert positions(result)[:3] == [
        (K.INT, 'int', 1, 1),
        (K.IDENTIFIER, 'x', 2, 3),
        (K.IDENTIFIER, 'y', 4, 2),
    ]


@pytest.mark.parametrize('word, kind', [
    ('int', K.INT),
    ('char', K.CHAR),
    ('return', K.RETURN),
    ('main', K.MAIN),
    ('if', K.IF),
    ('else', K.ELSE),
    ('integer', K.IDENTIFIER),
    ('_tmp1', K.IDENTIFIER),
])
def test_keywords_and_identifiers(word, kind):
    assert tokenize(word).kinds() == [kind, K.EOF]


def test_comments_are_skipped_and_lines_counted():
    result = tokenize('// leading comment\nint /* spans\ntwo */ x')
    assert positions(result) == [
        (K.INT, 'int', 2, 1),
        (K.IDENTIFIER, 'x', 3, 8),
        (K.EOF, '', 3, 9),
    ]


def test_unterminated_block_comment_runs_to_end():
    result = tokenize('int /* never closed\n x = 1;')
    assert result.kinds() == [K.INT, K.EOF]
    assert not result.has_error
    assert result[-1].line == 2


def test_literals():
    result = tokenize('42 3.14 "hello world" \'a\'')
    assert [(tok.kind, tok.lexeme) for tok in result] == [
        (K.NUMBER, '42'),
        (K.NUMBER, '3.14'),
        (K.STRING, 'hello world'),
        (K.CHAR, 'a'),
        (K.EOF, ''),
    ]


def test_operators_are_single_characters():
    result = tokenize('a==b+-*/c')
    assert [tok.lexeme for tok in result if tok.kind == K.OPERATOR] == ['=', '=', '+', '-', '*', '/']


def test_invalid_character_is_collected_and_skipped():
    result = tokenize('int @ x;\n#')

    assert result.has_error
    assert [(err.line, err.column, err.character, err.message) for err in result.errors] == [
        (1, 5, '@', "Invalid character '@'"),
        (2, 1, '#', "Invalid character '#'"),
    ]
    assert result.kinds() == [K.INT, K.IDENTIFIER, K.SEMICOLON, K.EOF]


def test_unterminated_string_reports_once_and_continues():
    source = 'int main(){ string s = "abc, def;\nint y; }'
    result = tokenize(source)

    assert len(result.errors) == 1
    err = result.errors[0]
    assert (err.line, err.column, err.character) == (1, 24, '"')
    assert err.message == 'Unterminated string literal'
    assert positions(result)[-5:] == [
        (K.INT, 'int', 2, 1),
        (K.IDENTIFIER, 'y', 2, 5),
        (K.SEMICOLON, ';', 2, 6),
        (K.RBRACE, '}', 2, 8),
        (K.EOF, '', 2, 9),
    ]


def test_unterminated_string_at_end_of_input():
    result = tokenize('x = "abc')
    assert len(result.errors) == 1
    assert result.kinds() == [K.IDENTIFIER, K.OPERATOR, K.EOF]


def test_errors_reach_the_diagnostics_collector():
    diagnostics = Diagnostics()
    tokenize('int $;', diagnostics)

    assert [(d.stage, d.line, d.column, d.message) for d in diagnostics] == [
        (Stage.LEXICAL, 1, 5, "Invalid character '$'"),
    ]


def test_each_run_starts_fresh():
    tokenize('@@@')
    result = tokenize('int\nx')
    assert result.errors == []
    assert result[1].line == 2
