import logging

from jamz_ast import NodeKind
from jamz_diagnostics import Diagnostics, Stage
from jamz_keywords import TYPE, FUNCTION, is_control_keyword
from jamz_lexer import TokenKind
from jamz_symbols import SymbolKind, SymbolTable, kind_for_type_name, is_assignable

'''
Semantic analysis walks the AST once with a chain of symbol tables

Every Program or Block gets its own table whose parent is the table of the enclosing block
The global table at the root is seeded from the keyword table, so builtin types and functions resolve like declarations
Errors are recorded and the walk carries on to the end of the tree; the AST is never modified
'''

log = logging.getLogger(__name__)

SCOPES = '$scopes'


class SemanticAnalyzer:
    def __init__(self, keywords, diagnostics=None):
        self.keywords = tuple(keywords)
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.symbols = {}
        self._reports = []

        self.visitors = {
            NodeKind.PROGRAM: self.visit_scope,
            NodeKind.BLOCK: self.visit_scope,
            NodeKind.DECLARATION: self.visit_declaration,
            NodeKind.ASSIGNMENT: self.visit_assignment,
            NodeKind.RETURN: self.visit_return,
            NodeKind.IF: self.visit_if,
            NodeKind.BINARY: self.visit_binary,
            NodeKind.LITERAL: self.visit_literal,
            NodeKind.VARIABLE: self.visit_variable,
        }

    def add_semantic_error(self, node, what):
        self.diagnostics.semantic(what, node.line, node.column)
        log.debug('semantic error at %d:%d: %s', node.line, node.column, what)

    def global_scope(self):
        scope = SymbolTable('global')
        for kw in self.keywords:
            if kw.category == TYPE:
                kind = SymbolKind.TYPE
            elif kw.category == FUNCTION:
                kind = SymbolKind.FUNCTION
            else:
                continue
            try:
                scope.insert(kw.name, kind)
            except KeyError as err:
                log.warning('keyword table lists %s twice: %s', kw.name, err)
        return scope

    def analyze(self, program):
        scope = self.global_scope()
        report = {SCOPES: {}}
        self.symbols = {'global': report}
        self._reports = [report]

        if program is not None:
            self.visit(program, scope)

        report.update(scope.snapshot())
        self._reports = []
        log.info('semantic analysis finished with %d errors', len(self.diagnostics.of_stage(Stage.SEMANTIC)))
        return self.diagnostics

    def visit(self, node, scope):
        self.visitors[node.kind](node, scope)

    # checks if a value of one kind can be stored in a variable of another
    def check_type_compat(self, node, name, target, value):
        if value is None or is_assignable(target, value):
            return True
        self.add_semantic_error(node, "Type mismatch: cannot assign %s to '%s' of type %s" % (value.value, name, target.value))
        return False

    # type of an expression, None when it cannot be known (errors are reported elsewhere)
    def infer(self, node, scope):
        if node.kind == NodeKind.LITERAL:
            if node.token_kind == TokenKind.NUMBER:
                return SymbolKind.FLOAT if '.' in node.value else SymbolKind.INT
            if node.token_kind == TokenKind.STRING:
                return SymbolKind.STRING
            if node.token_kind == TokenKind.CHAR:
                return SymbolKind.INT
            return None

        if node.kind in (NodeKind.VARIABLE, NodeKind.ASSIGNMENT):
            try:
                return scope.lookup(node.name).kind
            except KeyError:
                return None

        if node.kind == NodeKind.BINARY:
            left, right = self.infer(node.left, scope), self.infer(node.right, scope)
            return SymbolKind.INT if left == right == SymbolKind.INT else None

        return None

    def visit_scope(self, node, scope):
        parent_report = self._reports[-1]
        if node.kind == NodeKind.PROGRAM:
            name = 'program'
        else:
            name = 'block_%d' % (len(parent_report[SCOPES]) + 1)

        inner = SymbolTable(name, scope)
        report = {SCOPES: {}}
        parent_report[SCOPES][name] = report
        self._reports.append(report)

        for stmt in node.children():
            self.visit(stmt, inner)

        report.update(inner.snapshot())
        self._reports.pop()
        log.debug('leaving %r', inner)

    def visit_declaration(self, node, scope):
        kind = kind_for_type_name(node.type_name)
        if kind is None:
            self.add_semantic_error(node, "Invalid type '%s' for variable '%s'" % (node.type_name, node.name))

        if is_control_keyword(node.name, self.keywords):
            self.add_semantic_error(node, "'%s' is a reserved keyword" % node.name)

        # the initializer sees the scope as it was before this declaration
        if node.initializer is not None:
            self.visit(node.initializer, scope)
            if kind is not None:
                self.check_type_compat(node, node.name, kind, self.infer(node.initializer, scope))

        if kind is None:
            return

        try:
            scope.insert(node.name, kind, node.line, node.column)
            log.debug('Found %r in %r', scope.lookup_local(node.name), scope)
        except KeyError:
            self.add_semantic_error(node, "Variable '%s' already declared in this scope" % node.name)

    def visit_assignment(self, node, scope):
        try:
            entry = scope.lookup(node.name)
        except KeyError:
            self.add_semantic_error(node, "Variable '%s' not declared" % node.name)
        else:
            if entry.is_variable:
                self.check_type_compat(node, node.name, entry.kind, self.infer(node.value, scope))
            else:
                self.add_semantic_error(node, "Cannot assign to %s '%s'" % (entry.kind.value, node.name))

        self.visit(node.value, scope)

    def visit_return(self, node, scope): # the returned value is not checked against main's type
        if node.value is not None:
            self.visit(node.value, scope)

    def visit_if(self, node, scope):
        self.visit(node.condition, scope)
        for branch in (node.then_branch, node.else_branch):
            if branch is None:
                continue
            if branch.kind == NodeKind.BLOCK:
                self.visit(branch, scope)
            else: # an unbraced branch still gets a scope of its own
                self.visit(branch, SymbolTable('branch', scope))

    def visit_binary(self, node, scope):
        self.visit(node.left, scope)
        self.visit(node.right, scope)

        left, right = self.infer(node.left, scope), self.infer(node.right, scope)
        if left is None or right is None:
            return
        if left != SymbolKind.INT or right != SymbolKind.INT:
            self.add_semantic_error(node, "Invalid operand types for '%s': %s and %s" % (node.op, left.value, right.value))

    def visit_literal(self, node, scope):
        if node.token_kind not in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.CHAR):
            self.add_semantic_error(node, "Unknown literal '%s'" % node.value)

    def visit_variable(self, node, scope):
        if not scope.resolves(node.name):
            self.add_semantic_error(node, "Variable '%s' not declared" % node.name)


# convenience entry point: a fresh analyzer and collector per call unless one is given
def analyze(program, keywords, diagnostics=None):
    return SemanticAnalyzer(keywords, diagnostics).analyze(program)
