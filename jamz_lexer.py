import enum
import logging
from collections import namedtuple

from sly import Lexer

'''
Lexer produces tokens for the parser

Tokens carry a kind, the matched text and the 1-based line and column where they start
Lexical errors are collected and scanning carries on, so one run reports every bad character
'''

log = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    INT = 'int'
    RETURN = 'return'
    IDENTIFIER = 'identifier'
    NUMBER = 'number'
    OPERATOR = 'operator'
    SEMICOLON = 'semicolon'
    LPAREN = 'lparen'
    RPAREN = 'rparen'
    LBRACE = 'lbrace'
    RBRACE = 'rbrace'
    STRING = 'string'
    CHAR = 'char'
    MAIN = 'main'
    IF = 'if'
    ELSE = 'else'
    EOF = 'eof'
    UNKNOWN = 'unknown'


class Token(namedtuple('Token', 'kind lexeme line column')):
    __slots__ = ()

    def __repr__(self):
        return '%s(%r)@%d:%d' % (self.kind.name, self.lexeme, self.line, self.column)


class LexError(namedtuple('LexError', 'line column character message')):
    __slots__ = ()

    def __str__(self):
        return '[Line %d, Column %d] %s' % (self.line, self.column, self.message)


class TokenList:
    def __init__(self, tokens, errors):
        self.tokens = tokens
        self.errors = errors

    @property
    def has_error(self):
        return len(self.errors) > 0

    def kinds(self):
        return [tok.kind for tok in self.tokens]

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __getitem__(self, i):
        return self.tokens[i]

    def __repr__(self):
        return 'TOKENS (tokens: %d, errors: %d)' % (len(self.tokens), len(self.errors))


class JamzLexer(Lexer):
    # Define names of tokens
    tokens = {INT, CHAR, RETURN, MAIN, IF, ELSE, IDENTIFIER, NUMBER, STRING, CHARACTER, OPERATOR, SEMICOLON, LPAREN, RPAREN, LBRACE, RBRACE}

    # Specify things to ignore
    ignore = ' \t\r\f\v' # newlines are counted separately

    @_(r'/\*[\s\S]*?(?:\*/|\Z)') # an unterminated block comment runs to the end of input
    def ignore_block_comment(self, t):
        breaks = t.value.count('\n')
        if breaks:
            self.lineno += breaks
            self.line_start = t.index + t.value.rfind('\n') + 1

    ignore_line_comment = r'//[^\n]*'

    @_(r'"[^"\n]*"')
    def STRING(self, t):
        t.value = t.value[1:-1]
        return t

    @_(r'"[^"\n]*')
    def ignore_unterminated_string(self, t): # the rest of the line is taken as the broken literal
        self.report(t.index, '"', 'Unterminated string literal')

    @_(r"'(?:\\.|[^'\\\n])'")
    def CHARACTER(self, t):
        t.value = t.value[1:-1]
        return t

    # Specify REs for each token
    NUMBER = r'\d+(?:\.\d+)?'
    IDENTIFIER = r'[A-Za-z_][A-Za-z0-9_]*'

    # keywords share the IDENTIFIER pattern and are remapped
    IDENTIFIER['int'] = INT
    IDENTIFIER['char'] = CHAR
    IDENTIFIER['return'] = RETURN
    IDENTIFIER['main'] = MAIN
    IDENTIFIER['if'] = IF
    IDENTIFIER['else'] = ELSE

    OPERATOR = r'[-+*/=]'
    SEMICOLON = r';'
    LPAREN = r'\('
    RPAREN = r'\)'
    LBRACE = r'\{'
    RBRACE = r'\}'

    kinds = {
        'INT': TokenKind.INT,
        'CHAR': TokenKind.CHAR,
        'CHARACTER': TokenKind.CHAR,
        'RETURN': TokenKind.RETURN,
        'MAIN': TokenKind.MAIN,
        'IF': TokenKind.IF,
        'ELSE': TokenKind.ELSE,
        'IDENTIFIER': TokenKind.IDENTIFIER,
        'NUMBER': TokenKind.NUMBER,
        'STRING': TokenKind.STRING,
        'OPERATOR': TokenKind.OPERATOR,
        'SEMICOLON': TokenKind.SEMICOLON,
        'LPAREN': TokenKind.LPAREN,
        'RPAREN': TokenKind.RPAREN,
        'LBRACE': TokenKind.LBRACE,
        'RBRACE': TokenKind.RBRACE,
    }

    def __init__(self, diagnostics=None):
        super().__init__()
        self.diagnostics = diagnostics
        self.errors = []
        self.lineno = 1
        self.line_start = 0 # index of the first character of the current line

    @_(r'\n+')
    def ignore_newline(self, t): # count lineno and columns
        self.lineno += len(t.value)
        self.line_start = t.index + len(t.value)

    def column(self, index):
        return index - self.line_start + 1

    def report(self, index, character, message):
        err = LexError(self.lineno, self.column(index), character, message)
        self.errors.append(err)
        if self.diagnostics is not None:
            self.diagnostics.lexical(message, err.line, err.column)
        log.debug('lexical error %s', err)

    def error(self, t):
        c = t.value[0]
        self.report(self.index, c, "Invalid character '%s'" % c)
        self.index += 1

    def scan(self, source):
        tokens = []
        self.errors = []
        self.lineno = 1
        self.line_start = 0

        for t in self.tokenize(source):
            kind = self.kinds.get(t.type, TokenKind.UNKNOWN)
            tokens.append(Token(kind, t.value, t.lineno, self.column(t.index)))

        tokens.append(Token(TokenKind.EOF, '', self.lineno, self.column(len(source))))
        return TokenList(tokens, list(self.errors))


# convenience entry point: one fresh lexer per run
def tokenize(source, diagnostics=None):
    result = JamzLexer(diagnostics).scan(source)
    log.info('lexer produced %d tokens, %d errors', len(result), len(result.errors))
    return result
