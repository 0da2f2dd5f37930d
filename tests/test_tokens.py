'''
Token model tests
'''

from labelcalc.tokens import (Token, Kind, Color, Target, coerce_target,
                              operator_symbol)
from labelcalc.util import CalcError

from pytest import raises


def test_operator_aliases():
    assert operator_symbol('*') == '×'
    assert operator_symbol('x') == '×'
    assert operator_symbol('/') == '÷'
    assert operator_symbol('−') == '-'
    assert Token.operator('+').value == '+'
    with raises(CalcError, match='Unknown operator'):
        Token.operator('^')


def test_operand_rejects_non_numbers():
    with raises(CalcError):
        Token.operand('Error')


def test_grouping_marks():
    assert Token.grouping('(').is_open
    assert Token.grouping(')').is_close
    with raises(CalcError):
        Token.grouping('[')


def test_labels_follow_fields():
    token = Token.operand('1234', label='rent')
    assert token.number_label == '1,234'
    assert token.name_label == 'rent'
    token.unit = '円'
    token.value = '5678'
    assert token.number_label == '5,678 円'
    assert token.name_label == 'rent'
    token.label = None
    assert token.name_label is None


def test_non_operands_have_no_labels():
    token = Token.operator('+')
    assert token.kind is Kind.OPERATOR
    assert token.number_label is None
    assert token.name_label is None


def test_colour_coercion():
    assert Token.operand('1', color='red').color is Color.RED
    with raises(CalcError, match='Unknown colour'):
        Token.operand('1', color='purple')


def test_copy_is_independent():
    token = Token.operand('1', label='a', ident='operand-0')
    copy = token.copy()
    assert copy == token
    copy.label = 'b'
    assert token.label == 'a'
    assert token.copy(value='2').value == '2'


def test_targets():
    assert coerce_target('current') is Target.CURRENT
    assert coerce_target(Target.PREVIOUS) is Target.PREVIOUS
    with raises(CalcError):
        coerce_target('next')
