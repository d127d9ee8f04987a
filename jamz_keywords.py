import json
import logging
import os

'''
Keyword table shared by the semantic analyzer

The table is a JSON list of {"name", "type", "category"} records, loaded once per run and never modified
Categories in use: "type" (builtin type names), "control" (reserved statement words), "function" (builtin functions)
'''

log = logging.getLogger(__name__)

DEFAULT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data', 'keywords.json')
ENV_VAR = 'JAMZ_KEYWORDS'

TYPE = 'type'
CONTROL = 'control'
FUNCTION = 'function'


class KeywordTableError(Exception):
    pass


class Keyword:
    __slots__ = ('name', 'type', 'category')

    def __init__(self, name, type, category):
        self.name = name
        self.type = type
        self.category = category

    def __eq__(self, other):
        if not isinstance(other, Keyword):
            return NotImplemented
        return (self.name, self.type, self.category) == (other.name, other.type, other.category)

    def __hash__(self):
        return hash((self.name, self.type, self.category))

    def __repr__(self):
        return 'KEYWORD %s (%s, %s)' % (self.name, self.category, self.type)


def is_keyword_of_category(name, category, keywords):
    return any(kw.name == name and kw.category == category for kw in keywords)


def is_control_keyword(name, keywords):
    return is_keyword_of_category(name, CONTROL, keywords)


def parse_keywords(records):
    keywords = []
    if not isinstance(records, list):
        raise KeywordTableError('keyword table must be a list of records')
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise KeywordTableError('keyword record %d is not an object' % i)
        try:
            keywords.append(Keyword(str(record['name']), str(record['type']), str(record['category'])))
        except KeyError as err:
            raise KeywordTableError('keyword record %d is missing %s' % (i, err)) from err
    return tuple(keywords)


def resolve_path(path=None):
    if path:
        return path
    return os.environ.get(ENV_VAR) or DEFAULT_PATH


# a missing or unreadable table is fatal for the run
def load_keywords(path=None):
    path = resolve_path(path)
    try:
        with open(path, encoding='utf-8') as source:
            records = json.load(source)
    except OSError as err:
        raise KeywordTableError('cannot read keyword table %s: %s' % (path, err.strerror or err)) from err
    except ValueError as err:
        raise KeywordTableError('cannot parse keyword table %s: %s' % (path, err)) from err

    keywords = parse_keywords(records)
    log.info('loaded %d keywords from %s', len(keywords), path)
    return keywords
