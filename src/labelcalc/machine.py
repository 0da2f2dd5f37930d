'''
Input state machine.

Builds an expression from discrete key presses. The machine owns an edit
buffer (the number being typed, with its label, unit and colour) and the
committed tokens typed before it. Once the screen is due for a reset, the
next digit starts a new number instead of extending the buffer.
'''

from collections import namedtuple
from itertools import count
import logging

from .evaluator import evaluate
from .formatter import format_number, format_result, canonical, parse_number
from .history import History
from .tokens import (Token, Target, MULTIPLY, OPEN, CLOSE, coerce_color,
                     coerce_target, operator_symbol)
from .util import CalcError, EditableStateViolation
from .variables import Variables


logger = logging.getLogger(__name__)

DIGITS = frozenset('0123456789.')

# Tells "leave the colour alone" apart from "clear the colour"
KEEP = object()

State = namedtuple('State', 'display unit value intermediate error notice '
                            'tokens history variables')


class Machine:
    '''
    Calculator engine for one interactive session.

    Every public action runs to completion and leaves the machine consistent;
    hosts read state() afterwards to redraw.
    '''

    ERROR_MARKER = 'Error'
    CURRENT_IDENT = 'current'

    def __init__(self, history_limit=None):
        self.history = History(limit=history_limit)
        self.variables = Variables()
        self._idents = count()
        self.clear()

    # Buffer

    def _reset_buffer_naming(self):
        self.label = None
        self.unit = None
        self.color = None

    def _begin_entry(self):
        '''
        Start a fresh number after a reset, forgetting the old buffer's naming.
        '''
        self._reset_buffer_naming()
        self.reset_screen = False
        self.intermediate = False

    def _commit_buffer(self):
        token = Token.operand(self.value, label=self.label, unit=self.unit,
                              color=self.color,
                              ident='operand-{}'.format(next(self._idents)))
        self.sequence.append(token)
        logger.debug('committed operand %r', token)
        return token

    def _ignored(self, action):
        if self.error:
            logger.debug('%s ignored in error state', action)
            return True
        return False

    def _fail(self, error):
        logger.debug('evaluation failed: %s', error)
        self.value = type(self).ERROR_MARKER
        self.sequence = []
        self._reset_buffer_naming()
        self.reset_screen = True
        self.intermediate = False
        self.error = True

    # Actions

    def input_digit(self, digit):
        '''
        Type a digit or decimal point.
        '''
        if digit not in DIGITS:
            raise CalcError('Not a digit: {!r}'.format(digit))
        self.notice = None
        if self._ignored('digit'):
            return
        if self.reset_screen:
            self._begin_entry()
            self.value = '0.' if digit == '.' else digit
        elif digit == '.':
            self.input_dot()
        elif self.value in ('0', '-0') and digit == '0':
            return
        else:
            if self.value in ('0', '-0'):
                self.value = self.value[:-1] + digit
            else:
                self.value += digit
            # Editing a named value un-names it
            self.label = None

    def input_dot(self):
        self.notice = None
        if self._ignored('dot'):
            return
        if self.reset_screen:
            self._begin_entry()
            self.value = '0.'
        elif '.' not in self.value:
            self.value += '.'
            self.label = None

    def input_parenthesis(self, mark):
        '''
        Type an open or close grouping mark.

        A number typed just before an open mark is multiplied by the group.
        '''
        if mark not in (OPEN, CLOSE):
            raise CalcError('Not a parenthesis: {!r}'.format(mark))
        self.notice = None
        if self._ignored('parenthesis'):
            return
        if mark == OPEN:
            if not self.reset_screen and self.value not in ('0', ''):
                self.set_operation(MULTIPLY)
            self.sequence.append(Token.grouping(OPEN))
        else:
            if not self.reset_screen:
                self._commit_buffer()
            self.sequence.append(Token.grouping(CLOSE))
            self.reset_screen = True

    def set_operation(self, op):
        '''
        Press an operator key.

        Pressing another operator straight after one replaces it.
        '''
        op = operator_symbol(op)
        self.notice = None
        if self._ignored('operator'):
            return
        if not self.reset_screen:
            self._commit_buffer()
        elif not self.sequence:
            # Chaining on from the previous result
            self._commit_buffer()
        elif self.sequence[-1].is_operator:
            logger.debug('replacing operator %s with %s',
                         self.sequence[-1].value, op)
            self.sequence[-1].value = op
            return
        self.sequence.append(Token.operator(op))
        self.reset_screen = True
        self._reset_buffer_naming()

    def calculate(self):
        '''
        Evaluate the expression, record it in history and show the result.

        Evaluation failures put the machine in the error state instead of
        raising.
        '''
        self.notice = None
        if self._ignored('calculate'):
            return
        try:
            if not self.reset_screen:
                self._commit_buffer()
            if not self.sequence:
                return
            result = format_result(evaluate(self.sequence))
        except CalcError as e:
            self._fail(e)
            return
        entry = self.history.push(self.sequence, result)
        logger.debug('calculated %r = %s', entry.tokens, result)
        self.value = result
        self.sequence = []
        self._reset_buffer_naming()
        self.reset_screen = True
        self.intermediate = False

    def clear(self):
        '''
        Back to the initial state. History and variables are kept.
        '''
        self.value = '0'
        self._reset_buffer_naming()
        self.sequence = []
        self.reset_screen = False
        self.intermediate = False
        self.error = False
        self.notice = None

    def delete(self):
        '''
        Remove the last typed character.
        '''
        self.notice = None
        if self._ignored('delete') or self.reset_screen:
            return
        exponent = self.value.lower().find('e')
        if exponent >= 0:
            # Exponents go as a whole; trimming one changes the magnitude
            value = self.value[:exponent]
        else:
            value = self.value[:-1]
        try:
            parse_number(value)
        except CalcError:
            value = '0'
        self.value = value

    def toggle_sign(self):
        self.notice = None
        if self._ignored('toggle sign'):
            return
        try:
            if parse_number(self.value) == 0:
                return
        except CalcError as e:
            self._fail(e)
            return
        if self.value.startswith('-'):
            self.value = self.value[1:]
        else:
            self.value = '-' + self.value

    def percentage(self):
        self.notice = None
        if self._ignored('percentage'):
            return
        try:
            self.value = canonical(parse_number(self.value) / 100)
        except CalcError as e:
            self._fail(e)

    def _last_operand(self):
        for token in reversed(self.sequence):
            if token.is_operand:
                return token
        return None

    def _editable_buffer(self):
        if self.intermediate:
            self.notice = str(EditableStateViolation(
                'Intermediate results cannot be edited'))
            logger.debug(self.notice)
            return False
        return True

    def set_label(self, target, label, color=KEEP):
        '''
        Name the buffer or the most recently committed operand.

        Leaves the colour alone unless one is given; None clears it.
        '''
        target = coerce_target(target)
        if color is not KEEP:
            color = coerce_color(color)
        self.notice = None
        if self._ignored('label'):
            return
        if target is Target.CURRENT:
            if not self._editable_buffer():
                return
            self.label = label or None
            if color is not KEEP:
                self.color = color
            return
        token = self._last_operand()
        if token is None:
            logger.debug('no committed operand to label')
            return
        token.label = label or None
        if color is not KEEP:
            token.color = color

    def set_unit(self, target, unit=None):
        target = coerce_target(target)
        self.notice = None
        if self._ignored('unit'):
            return
        if target is Target.CURRENT:
            if self._editable_buffer():
                self.unit = unit or None
            return
        token = self._last_operand()
        if token is None:
            logger.debug('no committed operand to set unit on')
            return
        token.unit = unit or None

    def load_from_history(self, index):
        '''
        Bring back a past calculation as the current expression.
        '''
        if not 0 <= index < len(self.history):
            logger.debug('no history entry %s', index)
            return
        entry = self.history[index]
        self.clear()
        self.sequence = [token.copy() for token in entry.tokens]
        self.value = entry.result
        self.reset_screen = True

    # Variables

    def save_variable(self, label, value, unit=None, color=None):
        return self.variables.save(label, value, unit=unit, color=color)

    def delete_variable(self, label):
        self.variables.delete(label)

    def input_variable(self, variable):
        '''
        Type a saved variable in place of a number.

        Takes a SavedVariable or the label of one.
        '''
        if isinstance(variable, str):
            if variable not in self.variables:
                raise CalcError('No such variable {!r}'.format(variable))
            variable = self.variables[variable]
        self.notice = None
        if self._ignored('variable'):
            return
        if self.reset_screen:
            self._begin_entry()
        self.value = variable.value
        self.label = variable.label
        self.unit = variable.unit
        self.color = variable.color
        self.reset_screen = False
        self.intermediate = False

    # Reading

    @property
    def display(self):
        return format_number(self.value)

    def expression_tokens(self):
        '''
        Committed tokens followed by the buffer, if it is being typed.
        '''
        tokens = [token.copy() for token in self.sequence]
        if not self.reset_screen and self.value:
            tokens.append(Token.operand(self.value, label=self.label,
                                        unit=self.unit, color=self.color,
                                        ident=type(self).CURRENT_IDENT))
        return tokens

    def state(self):
        return State(display=self.display,
                     unit=self.unit,
                     value=self.value,
                     intermediate=self.intermediate,
                     error=self.error,
                     notice=self.notice,
                     tokens=self.expression_tokens(),
                     history=list(self.history),
                     variables=list(self.variables))
