import logging

from sly import Parser
from sly.lex import Token as GrammarToken

from jamz_ast import Program, Block, Declaration, Assignment, Return, If, Binary, Literal, Variable
from jamz_lexer import Token, TokenKind

'''
Parser turns the token sequence into a Program node

The grammar accepts exactly one function, int main(), whose body is a block of declarations, assignments, returns, ifs and nested blocks
Binary operators all share one precedence level and chain left to right
The first syntax error is recorded and parsing stops; the caller gets None back
'''

log = logging.getLogger(__name__)


class ParseAbort(Exception):
    pass


class JamzParser(Parser):
    tokens = {INT, CHAR, RETURN, MAIN, IF, ELSE, IDENTIFIER, NUMBER, STRING, CHARACTER}
    start = 'program'

    precedence = ( # a trailing else belongs to the nearest if
        ('nonassoc', IFX),
        ('nonassoc', ELSE),
    )

    # tokens the grammar matches by their text
    punctuation = {TokenKind.OPERATOR, TokenKind.SEMICOLON, TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE}

    signature = ( # the only program shape accepted
        (TokenKind.INT, "Expected 'int' at start of program (main declaration)."),
        (TokenKind.MAIN, "Expected 'main' after 'int'."),
        (TokenKind.LPAREN, "Expected '(' after 'main'."),
        (TokenKind.RPAREN, "Expected ')' after 'main('."),
        (TokenKind.LBRACE, "Expected '{...}' block after 'main()'."),
    )

    def __init__(self, diagnostics=None):
        self.diagnostics = diagnostics
        self.end = None

    def abort(self, message, line, column):
        if self.diagnostics is not None:
            self.diagnostics.syntax(message, line, column)
        log.debug('syntax error at %d:%d: %s', line, column, message)
        raise ParseAbort(message)

    @classmethod
    def terminal(cls, token):
        if token.kind in cls.punctuation:
            return token.lexeme
        if token.kind == TokenKind.CHAR and token.lexeme != 'char': # character literal, not the type keyword
            return 'CHARACTER'
        return token.kind.name

    # hand the tokens to sly one at a time, stopping at EOF
    def feed(self, tokens):
        for i, tok in enumerate(tokens):
            if tok.kind == TokenKind.EOF:
                self.end = tok
                return
            t = GrammarToken()
            t.type = self.terminal(tok)
            t.value = tok
            t.lineno = tok.line
            t.index = i
            t.end = i + 1
            yield t

    def check_signature(self, tokens):
        for i, (kind, message) in enumerate(self.signature):
            tok = tokens[i] if i < len(tokens) else self.end
            if tok.kind != kind:
                self.abort(message, tok.line, tok.column)

    def parse_tokens(self, tokens):
        tokens = list(tokens)
        if not tokens or tokens[-1].kind != TokenKind.EOF: # synthesize the end marker right after the last token
            last = tokens[-1] if tokens else Token(TokenKind.EOF, '', 1, 1)
            tokens.append(Token(TokenKind.EOF, '', last.line, last.column + len(last.lexeme)))
        self.end = tokens[-1]

        try:
            self.check_signature(tokens)
            return self.parse(self.feed(tokens))
        except ParseAbort:
            return None

    # Productions #
    # program -> int main ( ) block
    @_('INT MAIN "(" ")" block')
    def program(self, p):
        program = Program([p.block], p.INT.line, p.INT.column)
        log.debug('Found %r', program)
        return program

    # block -> { statement* }
    @_('"{" statements "}"')
    def block(self, p):
        return Block(p.statements, p[0].line, p[0].column)

    @_('statements statement')
    def statements(self, p):
        p.statements.append(p.statement)
        return p.statements

    @_('empty')
    def statements(self, p): # list base level
        return []

    @_('declaration', 'assignment', 'return_stmt', 'if_stmt', 'block')
    def statement(self, p):
        log.debug('Found %r', p[0])
        return p[0]

    # declaration -> type_name <*> ident <= expr> ;
    @_('type_name IDENTIFIER initializer ";"')
    def declaration(self, p):
        return Declaration(p.type_name.lexeme, p.IDENTIFIER.lexeme, p.initializer, p.type_name.line, p.type_name.column)

    @_('type_name "*" IDENTIFIER initializer ";"')
    def declaration(self, p): # pointers only exist as a suffix on the type name
        return Declaration(p.type_name.lexeme + '*', p.IDENTIFIER.lexeme, p.initializer, p.type_name.line, p.type_name.column)

    @_('INT', 'CHAR', 'IDENTIFIER')
    def type_name(self, p):
        return p[0]

    @_('"=" expr')
    def initializer(self, p):
        return p.expr

    @_('empty')
    def initializer(self, p):
        return None

    # assignment -> ident = expr ;
    @_('IDENTIFIER "=" expr ";"')
    def assignment(self, p):
        return Assignment(p.IDENTIFIER.lexeme, p.expr, p.IDENTIFIER.line, p.IDENTIFIER.column)

    # return_stmt -> return <expr> ;
    @_('RETURN expr ";"')
    def return_stmt(self, p):
        return Return(p.expr, p.RETURN.line, p.RETURN.column)

    @_('RETURN ";"')
    def return_stmt(self, p):
        return Return(None, p.RETURN.line, p.RETURN.column)

    # if_stmt -> if ( expr ) statement <else statement>
    @_('IF "(" expr ")" statement %prec IFX')
    def if_stmt(self, p):
        return If(p.expr, p.statement, None, p.IF.line, p.IF.column)

    @_('IF "(" expr ")" statement ELSE statement')
    def if_stmt(self, p):
        return If(p.expr, p.statement0, p.statement1, p.IF.line, p.IF.column)

    # expr -> binary <= expr>, so a = b = 3 chains to the right
    @_('binary')
    def expr(self, p):
        return p.binary

    @_('binary "=" expr')
    def expr(self, p):
        target = p.binary
        if not isinstance(target, Variable):
            self.abort('Invalid assignment target', target.line, target.column)
        return Assignment(target.name, p.expr, target.line, target.column)

    # binary -> primary (op primary)*, one precedence level
    @_('binary "+" primary',
       'binary "-" primary',
       'binary "*" primary',
       'binary "/" primary')
    def binary(self, p):
        return Binary(p.binary, p[1].lexeme, p.primary, p.binary.line, p.binary.column)

    @_('primary')
    def binary(self, p):
        return p.primary

    @_('IDENTIFIER')
    def primary(self, p):
        return Variable(p.IDENTIFIER.lexeme, p.IDENTIFIER.line, p.IDENTIFIER.column)

    @_('NUMBER', 'STRING', 'CHARACTER')
    def primary(self, p):
        tok = p[0]
        return Literal(tok.lexeme, tok.kind, tok.line, tok.column)

    # epsilon rule
    @_('')
    def empty(self, p):
        pass

    def error(self, p):
        if not p:
            self.abort('Unexpected end of input', self.end.line, self.end.column)
        tok = p.value
        self.abort("Unexpected token '%s'" % tok.lexeme, tok.line, tok.column)


# convenience entry point: one fresh parser per run
def parse(tokens, diagnostics=None):
    program = JamzParser(diagnostics).parse_tokens(tokens)
    log.info('parser %s', 'built %r' % program if program is not None else 'failed')
    return program
