'''
Expression evaluation: shunting-yard reordering, then an RPN value stack.

Both stages are pure; nothing here touches machine state.
'''

import math
import operator

from .formatter import parse_number
from .tokens import ADD, SUBTRACT, MULTIPLY, DIVIDE
from .util import DivisionByZero, MalformedExpression, NumericOverflow


PRECEDENCE = {
    ADD: 1,
    SUBTRACT: 1,
    MULTIPLY: 2,
    DIVIDE: 2,
}

FUNCTIONS = {
    ADD: operator.__add__,
    SUBTRACT: operator.__sub__,
    MULTIPLY: operator.__mul__,
    DIVIDE: operator.__truediv__,
}


def to_rpn(tokens):
    '''
    Reorder infix tokens into postfix order.

    All operators are left-associative. Grouping marks never reach the
    output: an unmatched close mark is dropped, and so is any open mark still
    stacked at the end.
    '''
    output = []
    stack = []
    for token in tokens:
        if token.is_operand:
            output.append(token)
        elif token.is_operator:
            precedence = PRECEDENCE[token.value]
            while stack and stack[-1].is_operator and \
                    PRECEDENCE[stack[-1].value] >= precedence:
                output.append(stack.pop())
            stack.append(token)
        elif token.is_open:
            stack.append(token)
        elif token.is_close:
            while stack and not stack[-1].is_open:
                output.append(stack.pop())
            if stack:
                stack.pop()
    output.extend(token for token in reversed(stack) if token.is_operator)
    return output


def evaluate_rpn(queue):
    '''
    Evaluate postfix tokens with a value stack.

    An empty queue is 0.
    '''
    stack = []
    for token in queue:
        if token.is_operand:
            stack.append(parse_number(token.value))
            continue
        if len(stack) < 2:
            raise MalformedExpression(
                'Missing operand for {}'.format(token.value))
        # Right operand is on top
        right = stack.pop()
        left = stack.pop()
        if token.value == DIVIDE and right == 0:
            raise DivisionByZero('Division by zero')
        result = FUNCTIONS[token.value](left, right)
        if not math.isfinite(result):
            raise NumericOverflow('Result out of range')
        stack.append(result)
    if not stack:
        return 0.0
    if len(stack) > 1:
        raise MalformedExpression('Missing operator between operands')
    return stack[0]


def evaluate(tokens):
    '''
    Evaluate an infix token sequence, respecting precedence and grouping.
    '''
    return evaluate_rpn(to_rpn(tokens))
