'''
Expression tokens: operands, operators and grouping marks.
'''

from enum import Enum

from .formatter import name_label, number_label, parse_number
from .util import CalcError


class Kind(Enum):
    OPERAND = 'operand'
    OPERATOR = 'operator'
    GROUPING = 'grouping'


class Color(Enum):
    RED = 'red'
    YELLOW = 'yellow'
    BLUE = 'blue'
    ORANGE = 'orange'
    GREEN = 'green'
    WHITE = 'white'


class Target(Enum):
    '''
    Which operand a label or unit edit applies to.
    '''
    CURRENT = 'current'
    # The most recently committed operand
    PREVIOUS = 'previous'


ADD = '+'
SUBTRACT = '-'
MULTIPLY = '×'
DIVIDE = '÷'
OPERATORS = ADD, SUBTRACT, MULTIPLY, DIVIDE

# Alternative spellings, as typed on a keyboard
ALIASES = {
    '−': SUBTRACT,
    '*': MULTIPLY,
    'x': MULTIPLY,
    '/': DIVIDE,
}

OPEN = '('
CLOSE = ')'
GROUPINGS = OPEN, CLOSE


def operator_symbol(op):
    '''
    Normalise an operator spelling to its canonical symbol.
    '''
    op = ALIASES.get(op, op)
    if op not in OPERATORS:
        raise CalcError('Unknown operator {!r}'.format(op))
    return op


def coerce_color(color):
    if color is None or isinstance(color, Color):
        return color
    try:
        return Color(color)
    except ValueError:
        raise CalcError('Unknown colour {!r}'.format(color)) from None


def coerce_target(target):
    if isinstance(target, Target):
        return target
    try:
        return Target(target)
    except ValueError:
        raise CalcError('Unknown target {!r}'.format(target)) from None


class Token:
    '''
    One element of an expression.

    Only operands carry label, unit, colour and identity. The display labels
    are derived from the source fields on every read, so they can't go stale.
    '''

    __slots__ = 'kind', 'value', 'label', 'unit', 'color', 'ident'

    def __init__(self, kind, value, label=None, unit=None, color=None,
                 ident=None):
        self.kind = kind
        self.value = value
        self.label = label or None
        self.unit = unit or None
        self.color = coerce_color(color)
        self.ident = ident

    @classmethod
    def operand(cls, value, label=None, unit=None, color=None, ident=None):
        # Rejects anything that would evaluate to NaN
        parse_number(value)
        return cls(Kind.OPERAND, value, label=label, unit=unit, color=color,
                   ident=ident)

    @classmethod
    def operator(cls, op):
        return cls(Kind.OPERATOR, operator_symbol(op))

    @classmethod
    def grouping(cls, mark):
        if mark not in GROUPINGS:
            raise CalcError('Unknown grouping mark {!r}'.format(mark))
        return cls(Kind.GROUPING, mark)

    @property
    def is_operand(self):
        return self.kind is Kind.OPERAND

    @property
    def is_operator(self):
        return self.kind is Kind.OPERATOR

    @property
    def is_open(self):
        return self.kind is Kind.GROUPING and self.value == OPEN

    @property
    def is_close(self):
        return self.kind is Kind.GROUPING and self.value == CLOSE

    @property
    def number_label(self):
        if not self.is_operand:
            return None
        return number_label(self.value, self.unit)

    @property
    def name_label(self):
        if not self.is_operand:
            return None
        return name_label(self.label, self.unit)

    def copy(self, **changes):
        fields = {name: getattr(self, name) for name in self.__slots__}
        fields.update(changes)
        return type(self)(**fields)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name in self.__slots__)

    def __repr__(self):
        if not self.is_operand:
            return 'Token({}, {!r})'.format(self.kind.name, self.value)
        extras = ''.join(', {}={!r}'.format(name, getattr(self, name))
                         for name in ('label', 'unit', 'color', 'ident')
                         if getattr(self, name) is not None)
        return 'Token(OPERAND, {!r}{})'.format(self.value, extras)
