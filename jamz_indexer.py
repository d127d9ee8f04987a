'''
SourceIndexer maintains a record of all the line starts
Can return a line of source code given the line number, and can optionally mark the line with a ^
'''

class SourceIndexer:
    def __init__(self, source):
        self.source = source
        self.line_start_indices = {}

        self.lineno = 1
        self.mark_line_start(0)
        for index, c in enumerate(source):
            if c == '\n':
                self.advance_blank_lines(1)
                self.mark_line_start(index + 1)

    def mark_line_start(self, index):
        text_start = index
        for c in self.source[index:]:
            if c == ' ' or c == '\t':
                text_start += 1
            else:
                break
        self.line_start_indices[self.lineno] = (index, text_start)

    def advance_blank_lines(self, n):
        self.lineno += n

    # lines and columns are 1-based, like token positions
    def get_line(self, lineno, col=None):
        if lineno not in self.line_start_indices:
            return ('', '^') if col is not None else ''
        line = self._get_line_at_index(self.line_start_indices[lineno][1])
        if col is not None:
            return (line, self._mark_line(line, self.get_text_col(lineno, col)))
        return line

    def get_index(self, lineno, col):
        return self.line_start_indices[lineno][0] + col - 1

    # column relative to the first non-blank character of the line
    def get_text_col(self, lineno, col):
        index = self.get_index(lineno, col)
        return max(0, index - self.line_start_indices[lineno][1])

    def _mark_line(self, line, col):
        pre = (' ' * col)
        return (pre + '^')

    def _get_line_at_index(self, index):
        line = ''
        for c in self.source[index:]:
            if c == '\n':
                break
            line += c
        return line.rstrip('\r')
