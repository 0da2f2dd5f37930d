'''
History store tests
'''

from labelcalc.history import History
from labelcalc.tokens import Token


def test_most_recent_first():
    history = History()
    history.push([Token.operand('1')], '1')
    history.push([Token.operand('2')], '2')
    assert [entry.result for entry in history] == ['2', '1']
    assert history[0].result == '2'


def test_bounded():
    history = History()
    for n in range(51):
        history.push([Token.operand(str(n))], str(n))
    assert len(history) == 50 == history.limit
    assert history[0].result == '50'
    assert history[-1].result == '1'


def test_explicit_limit():
    history = History(limit=2)
    for n in range(3):
        history.push([], str(n))
    assert [entry.result for entry in history] == ['2', '1']
    assert history.limit == 2


def test_snapshot_is_a_copy():
    token = Token.operand('1', label='a')
    history = History()
    entry = history.push([token], '1')
    token.label = 'b'
    assert entry.tokens[0].label == 'a'
    assert isinstance(entry.tokens, tuple)
