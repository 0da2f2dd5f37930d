from collections import namedtuple
from functools import reduce
import operator

import regex

from .tokens import ALIASES, OPERATORS, Target
from .util import CalcError


Action = namedtuple('Action', 'name args')


class Lexer:
    '''
    Lexer for the calculator's key-stream grammar.

    Every lexeme stands for one or more key presses. Holds no state; lex and
    parse are separate so lexemes can be inspected before they are run.
    '''
    # Digits and decimal points, fed one key at a time
    NUMBER = r'''
              \d+
              \.?
              \d*
              |
              \.\d*
              '''
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      OPERATORS + tuple(ALIASES))) + r')'
    PAREN = r'[()]'

    # Single key commands, by the machine method or console command they run
    COMMANDS = {
        '=': 'calculate',
        'c': 'clear',
        '<': 'delete',
        '_': 'toggle_sign',
        '%': 'percentage',
        'h': 'show_history',
        'v': 'show_variables',
        '?': 'show_help',
    }
    COMMAND = r'(?:' + r'|'.join(map(regex.escape, COMMANDS)) + r')'

    # A leading ^ aims a label or unit at the last committed operand
    LABEL = r'''
             \^?
             '
             [^']*
             '
             # Optional colour, 'rent':red
             (?::[a-z]+)?
             '''
    UNIT = r'''
            \^?
            \[
            [^\]]*
            \]
            '''
    STORE = r'>\w+'
    RECALL = r'\$\w+'
    FORGET = r'!\w+'
    LOAD = r'@\d+'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<paren>' + PAREN + r')|' \
             r'(?<command>' + COMMAND + r')|' \
             r'(?<label>' + LABEL + r')|' \
             r'(?<unit>' + UNIT + r')|' \
             r'(?<store>' + STORE + r')|' \
             r'(?<recall>' + RECALL + r')|' \
             r'(?<forget>' + FORGET + r')|' \
             r'(?<load>' + LOAD + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises on the first bit of text that isn't a lexeme.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme does anything.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def parse(self, groups):
        '''
        Turn matched groups into the actions to run, in order.
        '''
        if 'number' in groups:
            return [Action('input_digit', (key,))
                    for key in groups['number']]
        elif 'operator' in groups:
            return [Action('set_operation', (groups['operator'],))]
        elif 'paren' in groups:
            return [Action('input_parenthesis', (groups['paren'],))]
        elif 'command' in groups:
            return [Action(type(self).COMMANDS[groups['command']], ())]
        elif 'label' in groups:
            target, text = self._targeted(groups['label'])
            if text.endswith("'"):
                return [Action('set_label', (target, text[1:-1]))]
            quoted, _, color = text.rpartition(':')
            return [Action('set_label', (target, quoted[1:-1], color))]
        elif 'unit' in groups:
            target, text = self._targeted(groups['unit'])
            return [Action('set_unit', (target, text[1:-1] or None))]
        elif 'store' in groups:
            return [Action('store', (groups['store'][1:],))]
        elif 'recall' in groups:
            return [Action('input_variable', (groups['recall'][1:],))]
        elif 'forget' in groups:
            return [Action('delete_variable', (groups['forget'][1:],))]
        elif 'load' in groups:
            return [Action('load_from_history', (int(groups['load'][1:]),))]
        return []

    def _targeted(self, text):
        if text.startswith('^'):
            return Target.PREVIOUS, text[1:]
        return Target.CURRENT, text
