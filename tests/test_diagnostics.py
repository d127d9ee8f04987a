from jamz_diagnostics import Diagnostic, Diagnostics, Stage
from jamz_indexer import SourceIndexer


def test_collects_in_order_by_stage():
    diagnostics = Diagnostics()
    diagnostics.lexical("Invalid character '@'", 1, 3)
    diagnostics.semantic("Variable 'y' not declared", 2, 1)

    assert diagnostics.has_errors
    assert diagnostics.messages() == ["Invalid character '@'", "Variable 'y' not declared"]
    assert diagnostics.of_stage(Stage.SEMANTIC) == [Diagnostic(Stage.SEMANTIC, "Variable 'y' not declared", 2, 1)]
    assert str(diagnostics.entries[0]) == "[Line 1, Column 3] Invalid character '@'"


def test_empty_collector():
    diagnostics = Diagnostics()
    assert not diagnostics.has_errors
    assert len(diagnostics) == 0
    assert diagnostics.format() == ''


def test_capacity_is_bounded():
    diagnostics = Diagnostics(capacity=3)
    for i in range(5):
        diagnostics.syntax('error %d' % i, 1, i + 1)

    assert len(diagnostics) == 3
    assert diagnostics.dropped == 2
    assert diagnostics.format().endswith('... 2 more errors not shown')


def test_format_marks_the_source_line():
    source = 'int main()\n{\n    y = 3;\n}\n'
    diagnostics = Diagnostics()
    diagnostics.semantic("Variable 'y' not declared", 3, 5)
    diagnostics.syntax('no position')

    assert diagnostics.format(SourceIndexer(source)).split('\n') == [
        "At line 3, col 5: semantic error: Variable 'y' not declared",
        '| y = 3;',
        '| ^',
        'syntax error: no position',
    ]


def test_indexer_lines():
    indexer = SourceIndexer('a\n  bc\r\n\nd')
    assert indexer.get_line(2) == 'bc'
    assert indexer.get_line(2, 4) == ('bc', ' ^')
    assert indexer.get_line(3) == ''
    assert indexer.get_line(9, 1) == ('', '^')
