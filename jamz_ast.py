import enum

'''
Definitions for AST nodes

Each node records the line and column of its first token and a kind tag that names its variant
Consumers dispatch on node.kind; children() lists the owned child nodes in source order

Program and Block own a list of statements
Declaration, Assignment, Return and If own at most the children their variant names
'''


class NodeKind(enum.Enum):
    PROGRAM = 'program'
    BLOCK = 'block'
    DECLARATION = 'declaration'
    ASSIGNMENT = 'assignment'
    RETURN = 'return'
    IF = 'if'
    BINARY = 'binary'
    LITERAL = 'literal'
    VARIABLE = 'variable'


### AST Nodes ###

class Node:
    kind = None

    def __init__(self, line=0, column=0):
        self.line = line
        self.column = column

    def children(self):
        return []

    def fields(self):
        return ()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.line, self.column, self.fields(), self.children()) == (other.line, other.column, other.fields(), other.children())

    __hash__ = None


class Program(Node):
    kind = NodeKind.PROGRAM

    def __init__(self, statements, line=1, column=1):
        self.statements = list(statements)
        super().__init__(line, column)

    def children(self):
        return list(self.statements)

    def __repr__(self):
        return 'PROGRAM (statements: %d)' % len(self.statements)


class Block(Node):
    kind = NodeKind.BLOCK

    def __init__(self, statements, line, column):
        self.statements = list(statements)
        super().__init__(line, column)

    def children(self):
        return list(self.statements)

    def __repr__(self):
        return 'BLOCK (statements: %d)' % len(self.statements)


## Statement Nodes ##
class Declaration(Node):
    kind = NodeKind.DECLARATION

    def __init__(self, type_name, name, initializer, line, column):
        self.type_name = type_name
        self.name = name
        self.initializer = initializer # may be None
        super().__init__(line, column)

    def children(self):
        return [self.initializer] if self.initializer is not None else []

    def fields(self):
        return (self.type_name, self.name)

    def __repr__(self):
        return 'VAR %s: %s%s' % (self.name, self.type_name, ' (initialized)' if self.initializer is not None else '')


class Assignment(Node): # also used for assignment inside an expression (a = b = 3)
    kind = NodeKind.ASSIGNMENT

    def __init__(self, name, value, line, column):
        self.name = name
        self.value = value
        super().__init__(line, column)

    def children(self):
        return [self.value]

    def fields(self):
        return (self.name,)

    def __repr__(self):
        return 'ASSIGN => VAR-REF %s' % self.name


class Return(Node):
    kind = NodeKind.RETURN

    def __init__(self, value, line, column):
        self.value = value # may be None
        super().__init__(line, column)

    def children(self):
        return [self.value] if self.value is not None else []

    def __repr__(self):
        return 'RETURN%s' % ('' if self.value is None else ' value')


class If(Node):
    kind = NodeKind.IF

    def __init__(self, condition, then_branch, else_branch, line, column):
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch # may be None
        super().__init__(line, column)

    def children(self):
        nodes = [self.condition, self.then_branch]
        if self.else_branch is not None:
            nodes.append(self.else_branch)
        return nodes

    def __repr__(self):
        return 'BRANCH%s' % (', alternative-present' if self.else_branch is not None else '')


## Expression Nodes ##
class Binary(Node):
    kind = NodeKind.BINARY

    def __init__(self, left, op, right, line, column):
        self.left = left
        self.op = op
        self.right = right
        super().__init__(line, column)

    def children(self):
        return [self.left, self.right]

    def fields(self):
        return (self.op,)

    def __repr__(self):
        return 'MATHEXPR %s' % self.op


class Literal(Node):
    kind = NodeKind.LITERAL

    def __init__(self, value, token_kind, line, column):
        self.value = value
        self.token_kind = token_kind # keeps number/string/char apart downstream
        super().__init__(line, column)

    def fields(self):
        return (self.value, self.token_kind)

    def __repr__(self):
        return 'LITERAL (%s, %s)' % (self.token_kind.name, self.value)


class Variable(Node):
    kind = NodeKind.VARIABLE

    def __init__(self, name, line, column):
        self.name = name
        super().__init__(line, column)

    def fields(self):
        return (self.name,)

    def __repr__(self):
        return 'VAR-REF %s' % self.name


# depth-first, parents before children
def walk(node):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


# indented tree with positions, for debugging output
def dump(node, indent='  '):
    lines = []

    def visit(n, depth):
        lines.append('%s%r @%d:%d' % (indent * depth, n, n.line, n.column))
        for child in n.children():
            visit(child, depth + 1)

    visit(node, 0)
    return '\n'.join(lines)
