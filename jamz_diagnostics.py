import enum

'''
Diagnostics collects the errors produced by every stage of a compilation run

One collector is created per run and handed to the lexer, parser and semantic analyzer in turn
Nothing is raised for source errors; the caller decides what to do once a stage returns
'''

MAX_DIAGNOSTICS = 100


class Stage(enum.Enum):
    LEXICAL = 'lexical'
    SYNTAX = 'syntax'
    SEMANTIC = 'semantic'


class Diagnostic:
    __slots__ = ('stage', 'message', 'line', 'column')

    def __init__(self, stage, message, line=None, column=None):
        self.stage = stage
        self.message = message
        self.line = line
        self.column = column

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return (self.stage, self.message, self.line, self.column) == (other.stage, other.message, other.line, other.column)

    def __hash__(self):
        return hash((self.stage, self.message, self.line, self.column))

    def __str__(self):
        if self.line is None:
            return self.message
        return '[Line %d, Column %d] %s' % (self.line, self.column, self.message)

    def __repr__(self):
        return '%s error %s' % (self.stage.name, str(self))


class Diagnostics:
    def __init__(self, capacity=MAX_DIAGNOSTICS):
        self.capacity = capacity
        self.entries = []
        self.dropped = 0 # entries past capacity are counted but not kept

    def error(self, stage, message, line=None, column=None):
        if len(self.entries) >= self.capacity:
            self.dropped += 1
            return None
        diag = Diagnostic(stage, message, line, column)
        self.entries.append(diag)
        return diag

    def lexical(self, message, line=None, column=None):
        return self.error(Stage.LEXICAL, message, line, column)

    def syntax(self, message, line=None, column=None):
        return self.error(Stage.SYNTAX, message, line, column)

    def semantic(self, message, line=None, column=None):
        return self.error(Stage.SEMANTIC, message, line, column)

    def of_stage(self, stage):
        return [diag for diag in self.entries if diag.stage == stage]

    def messages(self):
        return [diag.message for diag in self.entries]

    @property
    def has_errors(self):
        return len(self.entries) > 0

    def format(self, indexer=None):
        lines = []
        for diag in self.entries:
            if indexer is None or diag.line is None:
                lines.append('%s error: %s' % (diag.stage.value, str(diag)))
                continue
            err_line, mark = indexer.get_line(diag.line, diag.column)
            lines.append('At line %d, col %d: %s error: %s' % (diag.line, diag.column, diag.stage.value, diag.message))
            lines.append('| %s\n| %s' % (err_line, mark))
        if self.dropped:
            lines.append('... %d more errors not shown' % self.dropped)
        return '\n'.join(lines)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
