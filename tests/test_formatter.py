'''
Number and label formatting tests
'''

from types import SimpleNamespace

from labelcalc.formatter import (canonical, format_number, format_result,
                                 name_label, number_label, parse_number,
                                 render_tokens)
from labelcalc.tokens import Token
from labelcalc.util import MalformedExpression, NumericOverflow

from pytest import raises


def test_grouping():
    assert format_number('0') == '0'
    assert format_number('123') == '123'
    assert format_number('1234') == '1,234'
    assert format_number('1234567.891') == '1,234,567.891'
    assert format_number('-1234') == '-1,234'
    assert format_number('1234.') == '1,234.'


def test_fraction_not_grouped():
    assert format_number('0.12345') == '0.12345'


def test_grouping_idempotent():
    assert format_number('1,234.5') == '1,234.5'
    assert format_number(format_number('98765432')) == '98,765,432'


def test_exponential_verbatim():
    assert format_number('1.234568e+15') == '1.234568e+15'
    assert format_number('1E+21') == '1E+21'


def test_not_a_number_verbatim():
    assert format_number('Error') == 'Error'
    assert format_number('') == ''


def test_canonical():
    assert canonical(14.0) == '14'
    assert canonical(-0.0) == '0'
    assert canonical(0.5) == '0.5'
    assert canonical(2.5e-7) == '2.5e-07'


def test_canonical_overflow():
    with raises(NumericOverflow):
        canonical(float('inf'))


def test_result_exponential_fallback():
    assert format_result(123456789012.0) == '123456789012'
    assert format_result(1234567890123.0) == '1.234568e+12'
    assert format_result(0.1 + 0.2) == '3.000000e-01'
    assert parse_number(format_result(1234567890123.0)) == 1.234568e12


def test_parse_number():
    assert parse_number('1,234.5') == 1234.5
    assert parse_number('0.') == 0.0
    with raises(MalformedExpression, match='Cannot convert'):
        parse_number('Error')
    with raises(MalformedExpression):
        parse_number('nan')


def test_labels():
    assert number_label('1200') == '1,200'
    assert number_label('1200', 'kg') == '1,200 kg'
    assert name_label('price', 'kg') == 'price'
    assert name_label(None, 'kg') is None
    assert name_label('') is None


def test_render_tokens():
    tokens = [Token.operand('1200', label='price', unit='円'),
              Token.operator('×'),
              Token.grouping('('),
              Token.operand('3'),
              Token.grouping(')')]
    assert render_tokens(tokens) == 'price (1,200 円) × ( 3 )'


def test_render_duck_typed():
    token = SimpleNamespace(is_operand=True, name_label=None,
                            number_label='7 m')
    assert render_tokens([token]) == '7 m'
