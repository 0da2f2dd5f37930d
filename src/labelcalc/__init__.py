'''
Keypad calculator with named, unit-tagged numbers.

Takes key presses one at a time and keeps a live, editable expression:
numbers can be given a name, a unit and a colour as they are typed or after
they have been entered. Expressions are evaluated with the usual precedence
and parentheses, finished calculations go to a bounded history, and numbers
can be saved as variables and typed back in by name.

Not an arbitrary precision calculator; numbers are floats.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .tokens import Token, Color, Target
from .util import (CalcError, DivisionByZero, MalformedExpression,
                   NumericOverflow, EditableStateViolation)


__all__ = ('Machine', 'Lexer', 'CLI', 'Token', 'Color', 'Target',
           'CalcError', 'DivisionByZero', 'MalformedExpression',
           'NumericOverflow', 'EditableStateViolation')
