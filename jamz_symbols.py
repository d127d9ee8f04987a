import enum

'''
Contains all classes related to the Symbol Table

A SymbolTable holds the names declared in one scope and a reference to the table of the enclosing scope
Tables live only as long as the analyzer is inside their block; snapshot() keeps a printable copy
'''

# helper class for Enum
class AutoName(enum.Enum):
    def _generate_next_value_(name, start, count, last_values):
        return name.lower()


# kinds a declared name can have
class SymbolKind(AutoName):
    INT = enum.auto()
    FLOAT = enum.auto()
    STRING = enum.auto()
    TYPE = enum.auto()
    FUNCTION = enum.auto()


# variable type names understood by declarations
DECLARABLE_TYPES = {
    'int': SymbolKind.INT,
    'float': SymbolKind.FLOAT,
    'string': SymbolKind.STRING,
}

# kinds that can be stored into a variable of the given kind, besides itself
WIDENING = {
    SymbolKind.FLOAT: {SymbolKind.INT},
}


def kind_for_type_name(type_name):
    return DECLARABLE_TYPES.get(type_name)


def is_assignable(target, value):
    return target == value or value in WIDENING.get(target, ())


# class for single entry in symbol table
class Symbol:
    __slots__ = ('name', 'kind', 'line', 'column')

    def __init__(self, name, kind, line=None, column=None):
        self.name = name
        self.kind = kind
        self.line = line
        self.column = column

    @property
    def is_variable(self):
        return self.kind not in (SymbolKind.TYPE, SymbolKind.FUNCTION)

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.name == other.name and self.kind == other.kind

    def __hash__(self):
        return hash((self.name, self.kind))

    def __repr__(self):
        return '%s %s' % (self.kind.name, self.name)


class SymbolTable:
    '''
        one table per scope:
            1) the analyzer creates a table when it enters a Program or Block, passing the table it came from as parent
            2) declarations are inserted into the innermost table in the order they are visited
            3) lookups try the innermost table first and then walk the parent chain up to the global table
            4) when the analyzer leaves the block the table is simply dropped; the parent never points down

        names are unique within one table, but the same name may be declared again in a nested table (shadowing)
    '''
    def __init__(self, name='global', parent=None):
        self.name = name
        self.parent = parent
        self.table = dict()
        self.depth = 0 if parent is None else parent.depth + 1

    # insert a symbol into this scope, refusing redeclarations
    def insert(self, name, kind, line=None, column=None):
        if name in self.table:
            raise KeyError('symbol %s already declared in %s' % (name, self.name))
        self.table[name] = Symbol(name, kind, line, column)
        return self.table[name]

    # return the Symbol associated with that name, searching enclosing scopes
    def lookup(self, name):
        scope = self
        while scope is not None:
            if name in scope.table:
                return scope.table[name]
            scope = scope.parent
        raise KeyError('symbol %s does not exist' % name) # if this happens, the variable was used before declaration

    def lookup_local(self, name):
        return self.table.get(name)

    def resolves(self, name):
        try:
            self.lookup(name)
        except KeyError:
            return False
        return True

    def snapshot(self):
        return dict(self.table)

    def __contains__(self, name):
        return name in self.table

    def __len__(self):
        return len(self.table)

    def __repr__(self):
        return 'SCOPE %s (%d symbols)' % (self.name, len(self.table))
