'''
Shunting-yard and RPN evaluation tests
'''

from labelcalc.evaluator import evaluate, evaluate_rpn, to_rpn
from labelcalc.tokens import Token
from labelcalc.util import DivisionByZero, MalformedExpression, NumericOverflow

from pytest import raises


def tokens(text):
    '''
    Space separated infix text to tokens.
    '''
    result = []
    for word in text.split():
        if word in '()':
            result.append(Token.grouping(word))
        elif word in '+-×÷':
            result.append(Token.operator(word))
        else:
            result.append(Token.operand(word))
    return result


def test_precedence():
    assert evaluate(tokens('2 + 3 × 4')) == 14
    assert evaluate(tokens('( 2 + 3 ) × 4')) == 20


def test_left_associative():
    assert evaluate(tokens('10 - 4 - 3')) == 3
    assert evaluate(tokens('100 ÷ 10 ÷ 5')) == 2
    assert evaluate(tokens('8 - 2 + 1')) == 7


def test_rpn_order():
    assert [t.value for t in to_rpn(tokens('1 + 2 × ( 3 - 4 )'))] == \
        ['1', '2', '3', '4', '-', '×', '+']


def test_groupings_never_emitted():
    assert [t.value for t in to_rpn(tokens('( ( 1 + 2'))] == ['1', '2', '+']


def test_unmatched_close_is_dropped():
    assert evaluate(tokens('1 + 2 ) × 3')) == 9


def test_empty_is_zero():
    assert evaluate([]) == 0
    assert evaluate(tokens('( )')) == 0


def test_single_operand():
    assert evaluate(tokens('42')) == 42


def test_division_by_zero():
    with raises(DivisionByZero):
        evaluate(tokens('1 ÷ ( 2 - 2 )'))


def test_missing_operand():
    with raises(MalformedExpression):
        evaluate(tokens('5 +'))
    with raises(MalformedExpression):
        evaluate_rpn(tokens('×'))


def test_missing_operator():
    with raises(MalformedExpression):
        evaluate(tokens('( 1 ) 2'))


def test_overflow():
    with raises(NumericOverflow):
        evaluate(tokens('1e308 × 10'))


def test_grouped_operands():
    assert evaluate([Token.operand('1,000'), Token.operator('+'),
                     Token.operand('1')]) == 1001
