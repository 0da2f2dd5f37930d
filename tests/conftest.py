from pytest import fixture

from labelcalc.lexer import Lexer
from labelcalc.machine import Machine


@fixture
def machine():
    return Machine()


@fixture
def press(machine):
    '''
    Feed a line of keys to the machine fixture, as the console would.
    '''
    lexer = Lexer()

    def press(keys):
        for match in lexer.lex(keys):
            if lexer.isfeedable(match):
                for action in lexer.parse(lexer.matchedgroups(match)):
                    getattr(machine, action.name)(*action.args)
        return machine
    return press
