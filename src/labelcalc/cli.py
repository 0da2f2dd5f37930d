from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .formatter import number_label, render_tokens
from .lexer import Lexer
from .machine import Machine
from .tokens import Target
from .util import CalcError


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        history = None
        if self.history_file:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Each input line is a run of key presses. After every line the expression
    and display are printed again.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.labelcalc_history'

    HELP = '''\
0-9 .        digits
+ - * / x    operators (× ÷ − also accepted)
( )          grouping
=            calculate
c            clear
<            delete last digit
_            toggle sign
%            percentage
'name'       label the number being typed (^'name' for the last one entered)
'name':red   label and colour it (red yellow blue orange green white)
[unit]       unit of the number being typed (^[unit] for the last one entered)
>name        save the number being typed as a variable
$name        type a saved variable
!name        delete a saved variable
@N           load history entry N
h            list history
v            list variables
?            this help'''

    def dumper(self):
        '''
        Dump all lexemes matches and the actions they map to.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<actions>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                groups = lexer.matchedgroups(match)
                actions = lexer.parse(groups)
                print(*groups.keys(),
                      repr(match.group(0)),
                      ' '.join(action.name for action in actions) or '-',
                      sep='\t')

    def executor(self):
        '''
        Run the calculator over every input line.
        '''
        self.machine = Machine()
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        for action in lexer.parse(lexer.matchedgroups(match)):
                            self.apply(action)
            # Abort entire rest of line
            except CalcError as e:
                print(e.args[0], file=stderr)
            self.redraw()

    def apply(self, action):
        handler = getattr(self, 'do_' + action.name, None)
        if handler is None:
            handler = getattr(self.machine, action.name)
        handler(*action.args)

    def do_store(self, name):
        machine = self.machine
        if machine.error:
            raise CalcError('Nothing to save')
        machine.save_variable(name, machine.value, unit=machine.unit,
                              color=machine.color)
        machine.set_label(Target.CURRENT, name)

    def do_show_history(self):
        for index, entry in enumerate(self.machine.history):
            print('{}: {} = {}'.format(index, render_tokens(entry.tokens),
                                       number_label(entry.result)))

    def do_show_variables(self):
        for variable in self.machine.variables:
            print('{}\t{}'.format(variable.label,
                                  number_label(variable.value, variable.unit)))

    def do_show_help(self):
        print(self.HELP, file=stderr)

    def redraw(self):
        '''
        Print the expression being built and the display.
        '''
        state = self.machine.state()
        # Nothing committed means the expression is just the display
        if self.machine.sequence:
            print(render_tokens(state.tokens))
        print(number_label(state.value, state.unit))
        if state.notice:
            print(state.notice, file=stderr)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting input if either:

        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.args.history_file)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.machine = None
        self.argument_parser = ArgumentParser(description='Calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('--history-file',
                                          default=self.HISTORY_FILE)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            stream=stderr)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
