'''
Number and label formatting.

Two kinds of text are produced here: canonical value text, which is what the
machine stores and evaluates, and display text, which is grouped for reading.
Display text can always be fed back in; separators are stripped before the
integral part is grouped again.
'''

import math

import regex

from .util import MalformedExpression, NumericOverflow, wrap_user_errors


GROUP_SEPARATOR = ','
# Canonical results longer than this fall back to exponential notation
EXPONENT_THRESHOLD = 12
EXPONENT_DIGITS = 6

NUMBER = regex.compile(r'''
                       ^
                       (?<sign>[-+]?)
                       (?<integral>[\d,]*)
                       (?<fractional>\.\d*)?
                       $
                       ''', flags=regex.VERBOSE)
# Position before every run of three digits up to the end of the integral part
THOUSANDS = regex.compile(r'\B(?=(?:\d{3})+(?!\d))')


@wrap_user_errors('Cannot convert {0!r}', error=MalformedExpression)
def parse_number(text):
    '''
    Parse canonical or display text into a float.
    '''
    number = float(text.replace(GROUP_SEPARATOR, ''))
    if not math.isfinite(number):
        raise MalformedExpression('Not a finite number: {!r}'.format(text))
    return number


def canonical(number):
    '''
    Return the shortest text that parses back to number.

    Integral values print without a trailing ".0".
    '''
    if not math.isfinite(number):
        raise NumericOverflow('Result out of range')
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def format_result(number):
    '''
    Canonical text for a computed result, exponential if too long.
    '''
    text = canonical(number)
    if len(text) > EXPONENT_THRESHOLD:
        return '{:.{}e}'.format(number, EXPONENT_DIGITS)
    return text


def format_number(text):
    '''
    Group the integral part of number text with thousands separators.

    Exponential forms and anything that isn't plain number text come back
    verbatim.
    '''
    if not text:
        return ''
    if 'e' in text.lower():
        return text
    match = NUMBER.match(text)
    if match is None:
        return text
    integral = match.group('integral').replace(GROUP_SEPARATOR, '')
    integral = THOUSANDS.sub(GROUP_SEPARATOR, integral)
    return match.group('sign') + integral + (match.group('fractional') or '')


def number_label(value, unit=None):
    formatted = format_number(value)
    return '{} {}'.format(formatted, unit) if unit else formatted


def name_label(label, unit=None):
    '''
    Name line of an operand. The unit only ever goes on the number line.
    '''
    return label or None


def render_token(token):
    if not token.is_operand:
        return token.value
    if token.name_label:
        return '{} ({})'.format(token.name_label, token.number_label)
    return token.number_label


def render_tokens(tokens):
    '''
    Render a token sequence on one line, e.g. "price (1,200 円) × 3".
    '''
    return ' '.join(render_token(token) for token in tokens)
